"""Tests for the Book aggregate."""

from decimal import Decimal

import pytest
from protean.exceptions import ValidationError

from bookstore.catalogue.book import Book
from bookstore.catalogue.events import BookAdded, BookImageChanged, BookRemoved, BookUpdated


def _book(**overrides):
    details = {"title": "Dune", "author": "Frank Herbert", "isbn": "9780441013593", "price": "9.99"}
    details.update(overrides)
    return Book.add(**details)


class TestBookCreation:
    def test_prices_are_canonical_text(self):
        book = _book(price="9.5", original_price=Decimal("12"))
        assert book.price == "9.50"
        assert book.original_price == "12.00"
        assert book.unit_price == Decimal("9.50")
        assert book.list_price == Decimal("12.00")

    def test_stock_defaults_to_zero(self):
        assert _book().stock == 0

    def test_original_price_is_optional(self):
        book = _book()
        assert book.original_price is None
        assert book.list_price is None

    def test_isbn_is_trimmed(self):
        assert _book(isbn=" 9780441013593 ").isbn == "9780441013593"

    def test_raises_book_added(self):
        book = _book(stock=3)
        event = book._events[0]
        assert isinstance(event, BookAdded)
        assert event.book_id == str(book.id)
        assert event.price == "9.99"
        assert event.stock == 3


class TestBookInvariants:
    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _book(price="-1.00")
        assert "price" in exc.value.messages

    def test_sub_cent_price_rejected(self):
        with pytest.raises(ValidationError):
            _book(price="1.999")

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            _book(stock=-1)

    def test_title_required(self):
        with pytest.raises(ValidationError):
            _book(title=None)


class TestBookChanges:
    def test_update_details_replaces_fields(self):
        book = _book()
        book._events.clear()

        book.update_details(title="Dune Messiah", price="11.25", stock=4, genre="Sci-Fi")

        assert book.title == "Dune Messiah"
        assert book.price == "11.25"
        assert book.stock == 4
        assert book.genre == "Sci-Fi"
        assert isinstance(book._events[-1], BookUpdated)

    def test_change_image(self):
        book = _book()
        book.change_image("https://covers.example.com/dune.jpg")
        assert book.image == "https://covers.example.com/dune.jpg"
        assert isinstance(book._events[-1], BookImageChanged)

    def test_remove_raises_book_removed(self):
        book = _book()
        book.remove()
        assert isinstance(book._events[-1], BookRemoved)
