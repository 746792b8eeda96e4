from bookstore.catalogue.book import Book
from bookstore.domain import bookstore
from bookstore.utils.queries import fetch_all, fetch_page


@bookstore.repository(part_of=Book)
class BookRepository:
    def find_by_isbn(self, isbn) -> Book | None:
        return self._dao.query.filter(isbn=(isbn or "").strip()).all().first

    def page(self, page: int, size: int, genre: str | None = None):
        """One zero-based page of books ordered by title; returns ``(books, total)``."""
        queryset = self._dao.query
        if genre is not None:
            queryset = queryset.filter(genre=genre)
        return fetch_page(queryset.order_by("title"), page, size)

    def distinct_genres(self) -> list[str]:
        return sorted({book.genre for book in fetch_all(self._dao.query) if book.genre})

    def by_ids(self, book_ids) -> dict[str, Book]:
        """Load many books in one query, keyed by id. Unknown ids are simply absent."""
        ids = sorted({str(book_id) for book_id in book_ids})
        if not ids:
            return {}
        return {str(book.id): book for book in fetch_all(self._dao.query.filter(id__in=ids))}
