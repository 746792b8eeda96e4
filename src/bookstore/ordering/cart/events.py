"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String

from bookstore.domain import bookstore


@bookstore.event(part_of="Cart")
class CartItemAdded:
    """A book was added to a cart, either as a new line or merged into an existing one."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    book_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@bookstore.event(part_of="Cart")
class CartItemQuantityUpdated:
    """The quantity of a cart line was set to a new value."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@bookstore.event(part_of="Cart")
class CartItemRemoved:
    """A line was removed from a cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    book_id = Identifier(required=True)


@bookstore.event(part_of="Cart")
class CartCleared:
    """Every line of a cart was discarded, on request or because the cart was checked out."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    reason = String(required=True, max_length=20)
