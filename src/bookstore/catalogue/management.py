"""Catalogue administration commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from bookstore.catalogue.book import Book
from bookstore.domain import bookstore
from bookstore.errors import BookAlreadyExists, BookInUse, BookNotFound
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


@bookstore.command(part_of="Book")
class AddBook:
    title: String(required=True, max_length=255)
    author: String(required=True, max_length=255)
    isbn: String(required=True, max_length=20)
    description: Text()
    price: String(required=True, max_length=20)
    original_price: String(max_length=20)
    stock: Integer(min_value=0, default=0)
    genre: String(max_length=100)
    image: String(max_length=1000)


@bookstore.command(part_of="Book")
class UpdateBook:
    """Replace every catalogue detail of an existing book."""

    book_id: Identifier(required=True)
    title: String(required=True, max_length=255)
    author: String(required=True, max_length=255)
    isbn: String(required=True, max_length=20)
    description: Text()
    price: String(required=True, max_length=20)
    original_price: String(max_length=20)
    stock: Integer(min_value=0, default=0)
    genre: String(max_length=100)
    image: String(max_length=1000)


@bookstore.command(part_of="Book")
class SetBookImage:
    book_id: Identifier(required=True)
    image: String(required=True, max_length=1000)


@bookstore.command(part_of="Book")
class RemoveBook:
    book_id: Identifier(required=True)


def load_book(repo, book_id) -> Book:
    try:
        return repo.get(book_id)
    except ObjectNotFoundError as exc:
        raise BookNotFound(f"Book {book_id} not found") from exc


def _details(command) -> dict:
    return {
        "title": command.title,
        "author": command.author,
        "isbn": command.isbn,
        "description": command.description,
        "price": command.price,
        "original_price": command.original_price,
        "stock": command.stock,
        "genre": command.genre,
        "image": command.image,
    }


def _ensure_isbn_free(repo, isbn, exclude_id=None):
    holder = repo.find_by_isbn(isbn)
    if holder is not None and str(holder.id) != str(exclude_id):
        raise BookAlreadyExists(f"A book with ISBN {isbn.strip()} already exists")


@bookstore.command_handler(part_of=Book)
class CatalogueManagementHandler:
    @handle(AddBook)
    def add_book(self, command):
        repo = current_domain.repository_for(Book)
        _ensure_isbn_free(repo, command.isbn)

        book = Book.add(**_details(command))
        repo.add(book)

        logger.info("book.added", book_id=str(book.id), isbn=book.isbn)
        return str(book.id)

    @handle(UpdateBook)
    def update_book(self, command):
        repo = current_domain.repository_for(Book)
        book = load_book(repo, command.book_id)
        _ensure_isbn_free(repo, command.isbn, exclude_id=book.id)

        book.update_details(**_details(command))
        repo.add(book)

        logger.info("book.updated", book_id=str(book.id))

    @handle(SetBookImage)
    def set_book_image(self, command):
        repo = current_domain.repository_for(Book)
        book = load_book(repo, command.book_id)

        book.change_image(command.image)
        repo.add(book)

    @handle(RemoveBook)
    def remove_book(self, command):
        # Imported here: ordering depends on the catalogue, not the other way round
        from bookstore.ordering.cart.cart import Cart
        from bookstore.ordering.order.order import Order

        repo = current_domain.repository_for(Book)
        book = load_book(repo, command.book_id)

        if current_domain.repository_for(Order).references_book(book.id):
            raise BookInUse("Book is referenced by existing orders")
        if current_domain.repository_for(Cart).references_book(book.id):
            raise BookInUse("Book is still in a shopping cart")

        book.remove()
        repo.add(book)
        repo._dao.delete(book)

        logger.info("book.removed", book_id=str(book.id))
