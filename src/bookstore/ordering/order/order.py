"""Order aggregate: an immutable, priced snapshot of a checked-out cart.

Item prices are copied from the catalogue at checkout and never follow later
price changes. The total is the exact sum of ``price * quantity`` over the
items. After creation only ``status`` changes.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from bookstore.domain import bookstore
from bookstore.ordering.order.events import OrderPlaced, OrderStatusChanged
from bookstore.shared.money import format_amount, line_total, parse_amount, sum_amounts


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, name: str) -> "OrderStatus":
        """Case-insensitive lookup by name; raises ``ValueError`` for anything else."""
        try:
            return cls[(name or "").strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown order status {name!r}") from None


@bookstore.entity(part_of="Order")
class OrderItem:
    book_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = String(required=True, max_length=20)  # Unit price at purchase time

    @property
    def unit_price(self) -> Decimal:
        return parse_amount(self.price)

    @property
    def subtotal(self) -> Decimal:
        return line_total(self.price, self.quantity)


@bookstore.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_amount = String(required=True, max_length=20)
    order_date = DateTime(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    cart_snapshot = String(max_length=100, unique=True)

    @invariant.post
    def total_must_match_items(self):
        if not self.items:
            return
        expected = sum_amounts(item.subtotal for item in self.items)
        if parse_amount(self.total_amount) != expected:
            raise ValidationError({"total_amount": [f"Total must equal the sum of item subtotals ({expected})"]})

    @classmethod
    def place(cls, user_id, lines, cart_snapshot=None):
        """Build a PENDING order from ``(book_id, quantity, unit_price)`` lines."""
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        items = [
            OrderItem(book_id=str(book_id), quantity=quantity, price=format_amount(unit_price))
            for book_id, quantity, unit_price in lines
        ]
        total = sum_amounts(item.subtotal for item in items)
        now = datetime.now(UTC)

        order = cls(
            user_id=str(user_id),
            items=items,
            total_amount=format_amount(total),
            order_date=now,
            status=OrderStatus.PENDING.value,
            cart_snapshot=cart_snapshot,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                total_amount=order.total_amount,
                item_count=len(items),
                placed_at=now,
            )
        )
        return order

    @property
    def total(self) -> Decimal:
        return parse_amount(self.total_amount)

    def change_status(self, status: OrderStatus):
        """Overwrite the status. Any status may follow any other."""
        previous = self.status
        self.status = status.value
        self.raise_(OrderStatusChanged(order_id=str(self.id), previous_status=previous, new_status=status.value))
