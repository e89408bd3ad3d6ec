"""Order status updates — command and handler.

Only the user who placed an order may change its status. Which moves are
allowed depends on ``custom.ORDER_STATUS_POLICY`` in the domain config.
"""

import structlog
from protean import handle
from protean.exceptions import ConfigurationError, ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.exceptions import NotFound
from ordering.order.order import Order, StatusPolicy

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)  # Caller; must own the order
    order_status = String(required=True, max_length=20)


def status_policy():
    """The configured ``StatusPolicy``. Unknown values are a configuration error."""
    custom = current_domain.config.get("custom") or {}
    value = custom.get("ORDER_STATUS_POLICY") or StatusPolicy.FORWARD.value
    try:
        return StatusPolicy(value)
    except ValueError:
        allowed = ", ".join(policy.value for policy in StatusPolicy)
        raise ConfigurationError(f"ORDER_STATUS_POLICY must be one of {allowed}, got {value!r}") from None


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise NotFound({"order_id": ["Order not found"]}) from None

        previous_status = order.order_status
        order.change_status(command.order_status, changed_by=command.user_id, policy=status_policy())
        repo.add(order)

        logger.info(
            "Order status changed",
            order_id=str(order.id),
            previous_status=previous_status,
            new_status=order.order_status,
        )
        return str(order.id)
