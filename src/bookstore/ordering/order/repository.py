"""Order reads.

Orders leave the repository fully materialised: an ``OrderView`` carries the
order, its items and every referenced book, the books fetched in one batch
for the whole result.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from protean.utils.globals import current_domain

from bookstore.catalogue.book import Book
from bookstore.domain import bookstore
from bookstore.ordering.order.order import Order, OrderItem
from bookstore.utils.queries import fetch_all


@dataclass(frozen=True)
class OrderView:
    order: Order
    items: tuple[OrderItem, ...]
    books: Mapping[str, Book]

    def book(self, book_id) -> Book | None:
        return self.books.get(str(book_id))


@bookstore.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[OrderView]:
        return self.materialise(fetch_all(self._dao.query.filter(user_id=str(user_id)).order_by("-order_date")))

    def newest_first(self) -> list[OrderView]:
        return self.materialise(fetch_all(self._dao.query.order_by("-order_date")))

    def view(self, order_id) -> OrderView:
        return self.materialise([self.get(order_id)])[0]

    def exists_for_user(self, user_id) -> bool:
        return self._dao.query.filter(user_id=str(user_id)).limit(1).all().total > 0

    def references_book(self, book_id) -> bool:
        dao = current_domain.repository_for(OrderItem)._dao
        return dao.query.filter(book_id=str(book_id)).limit(1).all().total > 0

    def materialise(self, orders) -> list[OrderView]:
        item_lists = [tuple(order.items) for order in orders]
        book_ids = {str(item.book_id) for items in item_lists for item in items}
        books = current_domain.repository_for(Book).by_ids(book_ids)
        return [OrderView(order=order, items=items, books=books) for order, items in zip(orders, item_lists)]
