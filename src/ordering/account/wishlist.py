"""Wishlist management — commands and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.account.lookup import find_user
from ordering.account.user import User
from ordering.domain import ordering


@ordering.command(part_of="User")
class AddToWishlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command(part_of="User")
class RemoveFromWishlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command_handler(part_of=User)
class ManageWishlistHandler:
    @handle(AddToWishlist)
    def add_to_wishlist(self, command):
        user = find_user(command.user_id)
        user.add_to_wishlist(command.product_id)
        current_domain.repository_for(User).add(user)
        return list(user.wishlist)

    @handle(RemoveFromWishlist)
    def remove_from_wishlist(self, command):
        user = find_user(command.user_id)
        user.remove_from_wishlist(command.product_id)
        current_domain.repository_for(User).add(user)
        return list(user.wishlist or [])
