"""Book aggregate: one title in the catalogue."""

from decimal import Decimal

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Integer, String, Text

from bookstore.catalogue.events import BookAdded, BookImageChanged, BookRemoved, BookUpdated
from bookstore.domain import bookstore
from bookstore.shared.money import format_amount, parse_amount

# Attributes a catalogue update replaces wholesale
DETAIL_FIELDS = ("title", "author", "isbn", "description", "genre", "stock", "image", "price", "original_price")


@bookstore.aggregate
class Book:
    """A title offered for sale.

    Prices are held as canonical two-decimal text; ``unit_price`` exposes them
    as ``Decimal``. ``original_price`` is the optional list price shown next to
    a discounted ``price``.
    """

    title: String(required=True, max_length=255)
    author: String(required=True, max_length=255)
    isbn: String(required=True, max_length=20, unique=True)
    description: Text()
    price: String(required=True, max_length=20)
    original_price: String(max_length=20)
    stock: Integer(min_value=0, default=0)
    genre: String(max_length=100)
    image: String(max_length=1000)

    @invariant.post
    def prices_must_be_valid_amounts(self):
        for field in ("price", "original_price"):
            value = getattr(self, field)
            if value is None:
                continue
            try:
                parse_amount(value)
            except ValueError as exc:
                raise ValidationError({field: [str(exc)]}) from exc

    @invariant.post
    def isbn_cannot_be_blank(self):
        if not (self.isbn or "").strip():
            raise ValidationError({"isbn": ["ISBN cannot be blank"]})

    @classmethod
    def add(cls, **details):
        book = cls(**_canonical(details))
        book.raise_(
            BookAdded(
                book_id=str(book.id),
                title=book.title,
                isbn=book.isbn,
                price=book.price,
                stock=book.stock,
            )
        )
        return book

    @property
    def unit_price(self) -> Decimal:
        return parse_amount(self.price)

    @property
    def list_price(self) -> Decimal | None:
        return parse_amount(self.original_price) if self.original_price is not None else None

    def update_details(self, **details):
        with atomic_change(self):
            for field, value in _canonical(details).items():
                setattr(self, field, value)

        self.raise_(
            BookUpdated(
                book_id=str(self.id),
                title=self.title,
                isbn=self.isbn,
                price=self.price,
                stock=self.stock,
            )
        )

    def change_image(self, image):
        self.image = image
        self.raise_(BookImageChanged(book_id=str(self.id), image=image))

    def remove(self):
        self.raise_(BookRemoved(book_id=str(self.id), isbn=self.isbn))


def _canonical(details: dict) -> dict:
    """Keep only catalogue fields, normalising ISBN and price text."""
    values = {field: details[field] for field in DETAIL_FIELDS if field in details}

    if values.get("isbn") is not None:
        values["isbn"] = values["isbn"].strip()

    for field in ("price", "original_price"):
        if values.get(field) is not None:
            try:
                values[field] = format_amount(values[field])
            except ValueError as exc:
                raise ValidationError({field: [str(exc)]}) from exc

    if values.get("stock") is None and "stock" in values:
        values["stock"] = 0

    return values
