"""Cart aggregate (CQRS) — the per-user collection of lines bought at checkout.

Each user owns at most one Cart. Lines hold a snapshot of the product name,
price and image taken when the line was first added; quantity changes never
refresh that snapshot. Every mutation bumps ``version`` so that checkout can
tell which state of the cart an order was priced from.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.cart.events import CartCheckedOut, CartCleared, CartLineRemoved, CartLineUpserted
from ordering.domain import ordering
from ordering.exceptions import InvalidState


class CartAction(Enum):
    UPDATE = "UPDATE"
    INCREMENT = "INCREMENT"


def parse_action(action_type):
    try:
        return CartAction(action_type)
    except ValueError:
        raise ValidationError(
            {"action_type": ["Invalid actionType. Must be either 'UPDATE' or 'INCREMENT'"]}
        ) from None


def require_positive_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError({"quantity": ["Invalid quantity for update. Must be a positive number."]})
    return quantity


@ordering.entity(part_of="Cart")
class CartLine:
    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    product_image = String(max_length=1000)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    added_at = DateTime()

    @property
    def line_total(self):
        return self.price * self.quantity


@ordering.aggregate
class Cart:
    user_id = Identifier(required=True)
    lines = HasMany(CartLine)
    version = Integer(default=0)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(
            user_id=str(user_id),
            version=0,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_line(self, product_id):
        return next((line for line in self.lines or [] if str(line.product_id) == str(product_id)), None)

    @property
    def is_empty(self):
        return not self.lines

    @property
    def total_price(self):
        return round(sum(line.line_total for line in self.lines or []), 2)

    def _touch(self):
        self.version = (self.version or 0) + 1
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def upsert_line(self, snapshot, action_type, quantity=None):
        """Insert or re-quantify the line for ``snapshot.product_id``.

        UPDATE sets the quantity to ``quantity``, which must be a positive
        integer whether or not the line already exists. INCREMENT adds one to
        an existing line, or inserts the product with quantity 1.
        """
        action = action_type if isinstance(action_type, CartAction) else parse_action(action_type)
        existing = self.find_line(snapshot.product_id)
        previous_quantity = existing.quantity if existing else 0

        if action == CartAction.UPDATE:
            new_quantity = require_positive_quantity(quantity)
        else:
            new_quantity = previous_quantity + 1

        if existing:
            existing.quantity = new_quantity
        else:
            self.add_lines(
                CartLine(
                    product_id=str(snapshot.product_id),
                    product_name=snapshot.name,
                    product_image=snapshot.image or "",
                    quantity=new_quantity,
                    price=snapshot.price,
                    added_at=datetime.now(UTC),
                )
            )

        self._touch()
        self.raise_(
            CartLineUpserted(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(snapshot.product_id),
                action_type=action.value,
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
                cart_version=self.version,
            )
        )

    def remove_line(self, product_id):
        """Remove every line for ``product_id``. Absent products are a no-op."""
        matching = [line for line in self.lines or [] if str(line.product_id) == str(product_id)]
        if not matching:
            return

        for line in matching:
            self.remove_lines(line)

        self._touch()
        self.raise_(
            CartLineRemoved(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product_id),
                cart_version=self.version,
            )
        )

    def clear(self):
        if self.is_empty:
            return

        self._drain()
        self._touch()
        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                cart_version=self.version,
            )
        )

    def _drain(self):
        for line in list(self.lines):
            self.remove_lines(line)

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def snapshot_lines(self):
        """Plain copies of the current lines, in cart order."""
        return [
            {
                "product_id": str(line.product_id),
                "product_name": line.product_name,
                "product_image": line.product_image,
                "quantity": line.quantity,
                "price": line.price,
            }
            for line in self.lines or []
        ]

    def check_out(self, order_id):
        """Drain the cart after its contents became ``order_id``."""
        if self.is_empty:
            raise InvalidState({"cart": ["Cart is empty"]})

        line_count = len(self.lines)
        checked_out_version = self.version
        self._drain()
        self._touch()

        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                order_id=str(order_id),
                line_count=line_count,
                cart_version=checked_out_version,
            )
        )
