from protean.utils.globals import current_domain

from bookstore.domain import bookstore
from bookstore.ordering.cart.cart import Cart, CartItem


@bookstore.repository(part_of=Cart)
class CartRepository:
    def for_user(self, user_id) -> Cart | None:
        return self._dao.query.filter(user_id=str(user_id)).all().first

    def for_user_or_new(self, user_id) -> Cart:
        return self.for_user(user_id) or Cart.open_for(user_id)

    def owner_of_item(self, item_id) -> str | None:
        """User id owning the cart line ``item_id``, or ``None`` if no such line exists."""
        item = current_domain.repository_for(CartItem)._dao.query.filter(id=str(item_id)).all().first
        return str(item.user_id) if item is not None else None

    def references_book(self, book_id) -> bool:
        dao = current_domain.repository_for(CartItem)._dao
        return dao.query.filter(book_id=str(book_id)).limit(1).all().total > 0
