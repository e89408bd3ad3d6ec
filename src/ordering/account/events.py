"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="User")
class UserRegistered:
    """A new user account was created."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    first_name = String(required=True)
    last_name = String(required=True)
    registered_at = DateTime(required=True)


@ordering.event(part_of="User")
class WishlistItemAdded:
    """A product was saved to the user's wishlist."""

    __version__ = 1

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.event(part_of="User")
class WishlistItemRemoved:
    """A product was taken off the user's wishlist."""

    __version__ = 1

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
