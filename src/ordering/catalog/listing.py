"""Catalog listing — one page of products in a chosen order."""

import math

from protean.utils.globals import current_domain

from ordering.catalog.product import Product

# sortBy value -> DAO ordering; any other value keeps store order
SORT_ORDERS = {
    "alpha-A-Z": "name",
    "alpha-Z-A": "-name",
    "price-low-high": "price",
    "price-high-low": "-price",
    "date-new-old": "-created_at",
    "date-old-new": "created_at",
}


def list_products(page=1, limit=10, sort_by=None):
    """Return ``(products, total_pages)`` for the 1-based ``page``."""
    query = current_domain.repository_for(Product)._dao.query
    order_by = SORT_ORDERS.get(sort_by or "")
    if order_by:
        query = query.order_by(order_by)

    result = query.offset((page - 1) * limit).limit(limit).all()
    return result.items, math.ceil(result.total / limit)
