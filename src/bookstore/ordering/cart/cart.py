"""Cart aggregate: the per-user basket of books awaiting checkout.

Each user owns at most one cart. A cart holds at most one line per book;
adding a book that is already present increases that line's quantity. Every
mutation bumps ``revision``, so ``snapshot_key`` names one exact state of the
cart, which checkout records on the order it produces.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from bookstore.domain import bookstore
from bookstore.ordering.cart.events import CartCleared, CartItemAdded, CartItemQuantityUpdated, CartItemRemoved


@bookstore.entity(part_of="Cart")
class CartItem:
    user_id = Identifier(required=True)  # Owner, denormalised for ownership checks
    book_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@bookstore.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    revision = Integer(default=0)
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open_for(cls, user_id):
        return cls(user_id=str(user_id), revision=0, updated_at=datetime.now(UTC))

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def snapshot_key(self) -> str:
        return f"{self.id}@{self.revision}"

    @property
    def is_empty(self) -> bool:
        return not self.items

    def item(self, item_id):
        return next((i for i in self.items if str(i.id) == str(item_id)), None)

    def line_for(self, book_id):
        return next((i for i in self.items if str(i.book_id) == str(book_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, book_id, quantity):
        """Add ``quantity`` copies of a book, merging into the book's existing line."""
        _check_quantity(quantity)

        now = datetime.now(UTC)
        existing = self.line_for(book_id)
        if existing:
            existing.quantity += quantity
            item = existing
        else:
            item = CartItem(user_id=self.user_id, book_id=book_id, quantity=quantity, added_at=now)
            self.add_items(item)

        self._touch(now)
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(item.id),
                book_id=str(book_id),
                quantity=quantity,
                line_quantity=item.quantity,
            )
        )
        return item

    def update_item_quantity(self, item_id, new_quantity):
        _check_quantity(new_quantity)

        item = self.item(item_id)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in cart"]})

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self._touch()

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )
        return item

    def remove_item(self, item_id):
        item = self.item(item_id)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in cart"]})

        self.remove_items(item)
        self._touch()

        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item_id), book_id=str(item.book_id)))

    def clear(self):
        """Discard every line. Clearing an empty cart changes nothing."""
        self._discard_all("cleared")

    def check_out(self):
        """Empty the cart after its lines were turned into an order."""
        if self.is_empty:
            raise ValidationError({"cart": ["Cannot check out an empty cart"]})
        self._discard_all("checked_out")

    def _discard_all(self, reason):
        if self.is_empty:
            return

        item_count = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self._touch()

        self.raise_(CartCleared(cart_id=str(self.id), user_id=str(self.user_id), item_count=item_count, reason=reason))

    def _touch(self, now=None):
        self.revision = (self.revision or 0) + 1
        self.updated_at = now or datetime.now(UTC)


def _check_quantity(quantity):
    if quantity is None or quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be at least 1"]})
