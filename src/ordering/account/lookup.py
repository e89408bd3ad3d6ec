"""User lookup shared by the cart, wishlist and checkout handlers."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.account.user import User
from ordering.exceptions import NotFound


def find_user(user_id):
    """Load a user or raise ``NotFound`` with a readable message."""
    try:
        return current_domain.repository_for(User).get(str(user_id))
    except ObjectNotFoundError:
        raise NotFound({"user_id": ["User not found"]}) from None
