"""Order aggregate (CQRS) — the immutable, priced record produced at checkout.

An Order copies its lines from the cart snapshot and computes ``total_price``
once, at placement. Afterwards only ``order_status`` changes, and only on
behalf of the owning user.

Status policies:
    forward (default):
        pending → paid | cancelled
        paid → shipped | cancelled
        shipped → completed
        completed, cancelled → (terminal)
    permissive:
        any status may follow any other
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.domain import ordering
from ordering.exceptions import Forbidden, InvalidState
from ordering.order.events import OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    CREDIT_CARD = "creditCard"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bankTransfer"


class ShippingMethod(Enum):
    DOMESTIC = "domestic"
    INTERNATIONAL = "international"


class StatusPolicy(Enum):
    FORWARD = "forward"
    PERMISSIVE = "permissive"


# State machine transition map (forward policy)
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.CANCELLED},
    OrderStatus.PAID: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

_REQUIRED_ADDRESS_FIELDS = ("street_address", "city", "state", "postal_code", "country")


def parse_status(value):
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError({"order_status": ["Invalid order status"]}) from None


def missing_address_fields(address):
    """Names of required address fields that are absent or blank."""
    address = address or {}
    return [name for name in _REQUIRED_ADDRESS_FIELDS if not str(address.get(name) or "").strip()]


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, captured at checkout and never updated."""

    street_address = String(required=True, max_length=255)
    apartment = String(max_length=100)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLine:
    """One purchased product, frozen from the cart line it came from."""

    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    product_image = String(max_length=1000)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    user_id = Identifier(required=True)
    email = String(max_length=254)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    products = HasMany(OrderLine)
    total_price = Float(required=True, min_value=0.0)
    order_status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(choices=PaymentMethod)
    shipping_method = String(choices=ShippingMethod)
    use_shipping_as_billing = Boolean(default=False)
    newsletter_subscribed = Boolean(default=False)
    cart_version = Integer()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        user_id,
        lines,
        shipping_address,
        email=None,
        first_name=None,
        last_name=None,
        payment_method=None,
        shipping_method=None,
        use_shipping_as_billing=False,
        newsletter_subscribed=False,
        cart_version=None,
    ):
        """Create a pending order from cart line snapshots.

        Args:
            user_id: Owner of the order.
            lines: List of dicts with product_id, product_name, product_image,
                quantity, price, copied verbatim from the cart.
            shipping_address: Dict with street_address, apartment, city,
                state, postal_code, country.
        """
        if not lines:
            raise InvalidState({"cart": ["Cart is empty"]})

        missing = missing_address_fields(shipping_address)
        if missing:
            raise ValidationError({"shipping_address": ["Incomplete shipping address"], "missing": missing})

        now = datetime.now(UTC)
        total_price = round(sum(line["price"] * line["quantity"] for line in lines), 2)

        order = cls(
            user_id=str(user_id),
            email=email,
            first_name=first_name,
            last_name=last_name,
            products=[OrderLine(**line) for line in lines],
            total_price=total_price,
            order_status=OrderStatus.PENDING.value,
            shipping_address=ShippingAddress(
                street_address=shipping_address["street_address"],
                apartment=shipping_address.get("apartment"),
                city=shipping_address["city"],
                state=shipping_address["state"],
                postal_code=shipping_address["postal_code"],
                country=shipping_address["country"],
            ),
            payment_method=payment_method,
            shipping_method=shipping_method,
            use_shipping_as_billing=bool(use_shipping_as_billing),
            newsletter_subscribed=bool(newsletter_subscribed),
            cart_version=cart_version,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                line_count=len(lines),
                total_price=total_price,
                payment_method=payment_method,
                shipping_method=shipping_method,
                cart_version=cart_version,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Ownership & status
    # -------------------------------------------------------------------
    def is_owned_by(self, user_id):
        return str(self.user_id).strip() == str(user_id).strip()

    def assert_owned_by(self, user_id):
        if not self.is_owned_by(user_id):
            raise Forbidden({"order_id": ["You are not authorized to update this order"]})

    def _assert_can_transition(self, target_status, policy):
        if StatusPolicy(policy) == StatusPolicy.PERMISSIVE:
            return

        current = OrderStatus(self.order_status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise InvalidState(
                {"order_status": [f"Cannot transition from {current.value} to {target_status.value}"]}
            )

    def change_status(self, new_status, changed_by, policy=StatusPolicy.FORWARD.value):
        """Move the order to ``new_status`` on behalf of ``changed_by``.

        Ownership is checked before the status value, so a non-owner learns
        nothing about which statuses are valid.
        """
        self.assert_owned_by(changed_by)
        target = new_status if isinstance(new_status, OrderStatus) else parse_status(new_status)
        self._assert_can_transition(target, policy)

        previous_status = self.order_status
        self.order_status = target.value
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=previous_status,
                new_status=target.value,
                changed_at=now,
            )
        )
