"""Cart line management commands and their serialised entry points."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from bookstore.catalogue.book import Book
from bookstore.catalogue.management import load_book
from bookstore.domain import bookstore
from bookstore.errors import CartItemNotFound, Forbidden
from bookstore.ordering.cart.cart import Cart
from bookstore.ordering.locks import process_serialized
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


@bookstore.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    book_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@bookstore.command(part_of="Cart")
class UpdateCartItemQuantity:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@bookstore.command(part_of="Cart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@bookstore.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


def owned_cart(repo, user_id, item_id) -> Cart:
    """The user's cart, provided it holds ``item_id``.

    A line sitting in somebody else's cart is ``Forbidden``; a line that exists
    nowhere is ``CartItemNotFound``.
    """
    cart = repo.for_user(user_id)
    if cart is not None and cart.item(item_id) is not None:
        return cart

    owner = repo.owner_of_item(item_id)
    if owner is not None and owner != str(user_id):
        logger.warning("cart.foreign_item_access", user_id=str(user_id), item_id=str(item_id))
        raise Forbidden("Cart item belongs to another user")
    raise CartItemNotFound(f"Cart item {item_id} not found")


@bookstore.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        load_book(current_domain.repository_for(Book), command.book_id)

        repo = current_domain.repository_for(Cart)
        cart = repo.for_user_or_new(command.user_id)
        item = cart.add_item(book_id=command.book_id, quantity=command.quantity)
        repo.add(cart)

        logger.info("cart.item_added", user_id=str(command.user_id), book_id=str(command.book_id), quantity=command.quantity)
        return str(item.id)

    @handle(UpdateCartItemQuantity)
    def update_cart_item_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = owned_cart(repo, command.user_id, command.item_id)
        cart.update_item_quantity(item_id=command.item_id, new_quantity=command.quantity)
        repo.add(cart)
        return str(command.item_id)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = owned_cart(repo, command.user_id, command.item_id)
        cart.remove_item(item_id=command.item_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is None or cart.is_empty:
            return

        cart.clear()
        repo.add(cart)
        logger.info("cart.cleared", user_id=str(command.user_id))


def add_to_cart(user_id, book_id, quantity) -> str:
    return process_serialized(user_id, AddToCart(user_id=user_id, book_id=book_id, quantity=quantity))


def update_quantity(user_id, item_id, quantity) -> str:
    return process_serialized(user_id, UpdateCartItemQuantity(user_id=user_id, item_id=item_id, quantity=quantity))


def remove_item(user_id, item_id) -> None:
    process_serialized(user_id, RemoveCartItem(user_id=user_id, item_id=item_id))


def clear_cart(user_id) -> None:
    process_serialized(user_id, ClearCart(user_id=user_id))
