"""Order history — read side for a user's orders."""

from protean.utils.globals import current_domain

from ordering.order.order import Order


def list_orders_for_user(user_id):
    """All orders placed by ``user_id``, newest first. Empty when none."""
    query = current_domain.repository_for(Order)._dao.query
    return query.filter(user_id=str(user_id)).order_by("-created_at").limit(None).all().items
