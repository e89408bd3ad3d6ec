"""Cart line management — commands and handler.

Every command is issued on behalf of an authenticated user; the user must
exist. The handler returns the id of the cart it wrote.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.account.lookup import find_user
from ordering.cart.cart import Cart, parse_action
from ordering.cart.lookup import cart_for
from ordering.catalog.lookup import snapshot_product
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Cart")
class UpsertCartLine:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    action_type = String(required=True, max_length=20)
    quantity = Integer()


@ordering.command(part_of="Cart")
class RemoveCartLine:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@ordering.command_handler(part_of=Cart)
class ManageCartLinesHandler:
    @handle(UpsertCartLine)
    def upsert_cart_line(self, command):
        action = parse_action(command.action_type)
        find_user(command.user_id)
        snapshot = snapshot_product(command.product_id)

        cart = cart_for(command.user_id)
        cart.upsert_line(snapshot, action, quantity=command.quantity)
        current_domain.repository_for(Cart).add(cart)

        logger.info(
            "Cart line upserted",
            user_id=str(command.user_id),
            product_id=str(command.product_id),
            action_type=action.value,
            cart_version=cart.version,
        )
        return str(cart.id)

    @handle(RemoveCartLine)
    def remove_cart_line(self, command):
        find_user(command.user_id)

        cart = cart_for(command.user_id)
        cart.remove_line(command.product_id)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        find_user(command.user_id)

        cart = cart_for(command.user_id)
        cart.clear()
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)
