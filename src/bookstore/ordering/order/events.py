"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from bookstore.domain import bookstore


@bookstore.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a new PENDING order."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    total_amount = String(required=True)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)


@bookstore.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
