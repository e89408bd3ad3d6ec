"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Cart")
class CartLineUpserted:
    """A cart line was inserted, re-quantified or incremented."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    action_type = String(required=True)
    previous_quantity = Integer(default=0)
    new_quantity = Integer(required=True)
    cart_version = Integer(required=True)


@ordering.event(part_of="Cart")
class CartLineRemoved:
    """Every line for a product was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    cart_version = Integer(required=True)


@ordering.event(part_of="Cart")
class CartCleared:
    """The user emptied the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    cart_version = Integer(required=True)


@ordering.event(part_of="Cart")
class CartCheckedOut:
    """The cart contents were turned into an order and the cart was drained."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    order_id = Identifier(required=True)
    line_count = Integer(required=True)
    cart_version = Integer(required=True)
