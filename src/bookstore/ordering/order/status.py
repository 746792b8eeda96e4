"""Order status administration command and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from bookstore.domain import bookstore
from bookstore.errors import InvalidStatus, OrderNotFound
from bookstore.ordering.order.order import Order, OrderStatus
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


@bookstore.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)


@bookstore.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError as exc:
            raise OrderNotFound(f"Order {command.order_id} not found") from exc

        try:
            status = OrderStatus.parse(command.status)
        except ValueError as exc:
            raise InvalidStatus(f"Unknown order status: {command.status}") from exc

        order.change_status(status)
        repo.add(order)

        logger.info("order.status_changed", order_id=str(order.id), status=status.value)
        return str(order.id)
