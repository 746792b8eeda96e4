"""Pydantic request/response schemas for the catalogue API."""

from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from bookstore.api.schemas import CamelModel

# --- Request Schemas ---


class BookRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "The Pragmatic Programmer",
                    "author": "Andrew Hunt, David Thomas",
                    "isbn": "9780135957059",
                    "description": "Your journey to mastery.",
                    "genre": "Programming",
                    "stock": 12,
                    "image": "https://covers.example.com/9780135957059.jpg",
                    "price": "39.99",
                    "originalPrice": "49.99",
                }
            ]
        }
    }

    title: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., min_length=1, max_length=255)
    isbn: str = Field(..., min_length=1, max_length=20)
    description: str | None = None
    genre: str | None = Field(None, max_length=100)
    stock: int = Field(0, ge=0)
    image: str | None = Field(None, max_length=1000)
    price: Decimal = Field(..., ge=0, decimal_places=2)
    original_price: Decimal | None = Field(None, ge=0, decimal_places=2)


class BookImageRequest(CamelModel):
    image: str = Field(..., min_length=1, max_length=1000)


# --- Response Schemas ---


class BookRecord(CamelModel):
    id: str
    title: str
    author: str
    isbn: str
    description: str | None = None
    genre: str | None = None
    stock: int
    image: str | None = None
    price: Decimal
    original_price: Decimal | None = None


class BookPage(CamelModel):
    content: list[BookRecord]
    page: int
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool
    empty: bool


# --- Mappers ---


def book_record(book) -> BookRecord:
    return BookRecord(
        id=str(book.id),
        title=book.title,
        author=book.author,
        isbn=book.isbn,
        description=book.description,
        genre=book.genre,
        stock=book.stock or 0,
        image=book.image,
        price=book.unit_price,
        original_price=book.list_price,
    )
