"""Domain events for the Book aggregate."""

from protean.fields import Identifier, Integer, String

from bookstore.domain import bookstore


@bookstore.event(part_of="Book")
class BookAdded:
    """A new title was added to the catalogue."""

    __version__ = 1

    book_id: Identifier(required=True)
    title: String(required=True)
    isbn: String(required=True)
    price: String(required=True)
    stock: Integer(required=True)


@bookstore.event(part_of="Book")
class BookUpdated:
    """A book's catalogue details were replaced."""

    __version__ = 1

    book_id: Identifier(required=True)
    title: String(required=True)
    isbn: String(required=True)
    price: String(required=True)
    stock: Integer(required=True)


@bookstore.event(part_of="Book")
class BookImageChanged:
    __version__ = 1

    book_id: Identifier(required=True)
    image: String()


@bookstore.event(part_of="Book")
class BookRemoved:
    __version__ = 1

    book_id: Identifier(required=True)
    isbn: String(required=True)
