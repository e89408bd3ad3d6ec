"""Order placement — checkout command and handler.

Turns the user's current cart into a pending Order and drains the cart. Both
writes happen inside the handler's unit of work, so they commit together.

The order records the cart ``version`` it was priced from. A second checkout
of the same cart version is refused, which stops a replayed or double-clicked
checkout from producing two orders for one cart.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.account.lookup import find_user
from ordering.cart.cart import Cart
from ordering.cart.lookup import cart_for
from ordering.domain import ordering
from ordering.exceptions import Conflict, InvalidState
from ordering.order.order import Order, PaymentMethod, ShippingMethod, missing_address_fields

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    email = String(max_length=254)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    shipping_address = Text(required=True)  # JSON: address dict
    payment_method = String(choices=PaymentMethod)
    shipping_method = String(choices=ShippingMethod)
    use_shipping_as_billing = Boolean(default=False)
    newsletter_subscribed = Boolean(default=False)
    expected_cart_version = Integer()


def _already_placed(user_id, cart_version):
    query = current_domain.repository_for(Order)._dao.query
    return query.filter(user_id=str(user_id), cart_version=cart_version).limit(None).all().total > 0


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        user = find_user(command.user_id)
        cart = cart_for(command.user_id)

        if cart.is_empty:
            logger.info("Checkout refused, cart is empty", user_id=str(command.user_id))
            raise InvalidState({"cart": ["Cart is empty"]})

        shipping_address = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )
        missing = missing_address_fields(shipping_address)
        if missing:
            raise ValidationError({"shipping_address": ["Incomplete shipping address"], "missing": missing})

        if command.expected_cart_version is not None and command.expected_cart_version != cart.version:
            raise Conflict({"cart": ["Cart changed since it was last read"]})

        if _already_placed(command.user_id, cart.version):
            logger.warning(
                "Duplicate checkout refused",
                user_id=str(command.user_id),
                cart_version=cart.version,
            )
            raise Conflict({"cart": ["An order was already placed for this cart"]})

        order = Order.place(
            user_id=command.user_id,
            lines=cart.snapshot_lines(),
            shipping_address=shipping_address,
            email=command.email or user.email,
            first_name=command.first_name or user.first_name,
            last_name=command.last_name or user.last_name,
            payment_method=command.payment_method,
            shipping_method=command.shipping_method,
            use_shipping_as_billing=command.use_shipping_as_billing,
            newsletter_subscribed=command.newsletter_subscribed,
            cart_version=cart.version,
        )
        current_domain.repository_for(Order).add(order)

        cart.check_out(order.id)
        current_domain.repository_for(Cart).add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            total_price=order.total_price,
            line_count=len(order.products),
        )
        return str(order.id)
