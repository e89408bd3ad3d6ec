"""User aggregate — account profile and wishlist.

The shopping cart is not embedded here: it lives in its own Cart aggregate,
keyed by ``user_id``, so that cart writes carry their own version stamp and do
not rewrite the whole user record.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, List, String

from ordering.account.events import UserRegistered, WishlistItemAdded, WishlistItemRemoved
from ordering.domain import ordering
from ordering.exceptions import Conflict


@ordering.aggregate
class User:
    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    password_hash = String(max_length=255)
    wishlist = List(content_type=String)
    created_at = DateTime()

    @classmethod
    def register(cls, first_name, last_name, email, password_hash=None):
        now = datetime.now(UTC)
        user = cls(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=password_hash,
            wishlist=[],
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=email,
                first_name=first_name,
                last_name=last_name,
                registered_at=now,
            )
        )
        return user

    def has_wishlisted(self, product_id):
        return any(str(entry) == str(product_id) for entry in (self.wishlist or []))

    def add_to_wishlist(self, product_id):
        if self.has_wishlisted(product_id):
            raise Conflict({"product_id": ["Product already in wishlist"]})

        self.wishlist = [*(self.wishlist or []), str(product_id)]
        self.raise_(WishlistItemAdded(user_id=str(self.id), product_id=str(product_id)))

    def remove_from_wishlist(self, product_id):
        """Drop every matching entry. Absent ids are a no-op."""
        if not self.has_wishlisted(product_id):
            return

        self.wishlist = [entry for entry in self.wishlist if str(entry) != str(product_id)]
        self.raise_(WishlistItemRemoved(user_id=str(self.id), product_id=str(product_id)))
