"""Locate the cart that belongs to a user."""

from protean.utils.globals import current_domain

from ordering.cart.cart import Cart


def cart_for(user_id):
    """Return the user's cart, or a new unsaved empty one."""
    carts = current_domain.repository_for(Cart)._dao.query.filter(user_id=str(user_id)).all().items
    if carts:
        return carts[0]
    return Cart.create(user_id=user_id)
