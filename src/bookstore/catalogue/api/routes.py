"""FastAPI endpoints for the book catalogue."""

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from bookstore.api.schemas import MessageResponse
from bookstore.catalogue.api.schemas import BookImageRequest, BookPage, BookRecord, BookRequest, book_record
from bookstore.catalogue.book import Book
from bookstore.catalogue.management import AddBook, RemoveBook, SetBookImage, UpdateBook, load_book
from bookstore.shared.money import format_amount
from bookstore.utils.queries import page_count
from bookstore.utils.settings import custom_setting

router = APIRouter(prefix="/books", tags=["books"])


def _page_size(size: int | None) -> int:
    """Requested page size, defaulted and clamped to ``1..max_page_size``."""
    maximum = int(custom_setting("max_page_size", 100))
    if size is None:
        size = int(custom_setting("default_page_size", 10))
    return max(1, min(size, maximum))


def _book_page(page: int, size: int | None, genre: str | None = None) -> BookPage:
    size = _page_size(size)
    books, total = current_domain.repository_for(Book).page(page, size, genre=genre)
    pages = page_count(total, size)
    return BookPage(
        content=[book_record(book) for book in books],
        page=page,
        size=size,
        total_elements=total,
        total_pages=pages,
        first=page == 0,
        last=page >= pages - 1,
        empty=not books,
    )


def _details(body: BookRequest) -> dict:
    return {
        "title": body.title,
        "author": body.author,
        "isbn": body.isbn,
        "description": body.description,
        "genre": body.genre,
        "stock": body.stock,
        "image": body.image,
        "price": format_amount(body.price),
        "original_price": format_amount(body.original_price) if body.original_price is not None else None,
    }


@router.get("", response_model=BookPage)
def list_books(page: int = Query(0, ge=0), size: int | None = Query(None)) -> BookPage:
    return _book_page(page, size)


@router.get("/categories", response_model=list[str])
def list_categories() -> list[str]:
    return current_domain.repository_for(Book).distinct_genres()


@router.get("/category/{genre}", response_model=BookPage)
def list_books_by_category(genre: str, page: int = Query(0, ge=0), size: int | None = Query(None)) -> BookPage:
    return _book_page(page, size, genre=genre)


@router.get("/{book_id}", response_model=BookRecord)
def get_book(book_id: str) -> BookRecord:
    return book_record(load_book(current_domain.repository_for(Book), book_id))


@router.post("", status_code=201, response_model=BookRecord)
def create_book(body: BookRequest) -> BookRecord:
    book_id = current_domain.process(AddBook(**_details(body)), asynchronous=False)
    return book_record(current_domain.repository_for(Book).get(book_id))


@router.put("/{book_id}", response_model=BookRecord)
def update_book(book_id: str, body: BookRequest) -> BookRecord:
    current_domain.process(UpdateBook(book_id=book_id, **_details(body)), asynchronous=False)
    return book_record(current_domain.repository_for(Book).get(book_id))


@router.put("/{book_id}/image", response_model=BookRecord)
def set_book_image(book_id: str, body: BookImageRequest) -> BookRecord:
    current_domain.process(SetBookImage(book_id=book_id, image=body.image), asynchronous=False)
    return book_record(current_domain.repository_for(Book).get(book_id))


@router.delete("/{book_id}", response_model=MessageResponse)
def delete_book(book_id: str) -> MessageResponse:
    current_domain.process(RemoveBook(book_id=book_id), asynchronous=False)
    return MessageResponse(message="Book deleted")
