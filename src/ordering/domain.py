"""Ordering bounded context — accounts, carts, wishlists and orders.

Handles the per-user shopping cart, the wishlist, and the checkout flow that
turns a cart snapshot into a priced, status-tracked Order.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
