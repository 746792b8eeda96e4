"""Checkout: turning a user's cart into an order.

The order is created and the cart emptied inside one Unit of Work, so either
both changes commit or neither does. ``checkout`` runs the command under the
user's lock, which keeps the cart read and the cart clear free of interleaved
mutations. The unique ``cart_snapshot`` on the order guards the same cart
state across processes: a second order for it is refused with
``CartAlreadyCheckedOut``.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from bookstore.catalogue.book import Book
from bookstore.domain import bookstore
from bookstore.errors import BookNotFound, BookstoreError, CartAlreadyCheckedOut, CheckoutFailed, EmptyCart
from bookstore.ordering.cart.cart import Cart
from bookstore.ordering.locks import process_serialized
from bookstore.ordering.order.order import Order
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


@bookstore.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)


@bookstore.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.for_user(command.user_id)
        if cart is None or cart.is_empty:
            raise EmptyCart()

        lines = list(cart.items)
        books = current_domain.repository_for(Book).by_ids(item.book_id for item in lines)
        missing = [str(item.book_id) for item in lines if str(item.book_id) not in books]
        if missing:
            raise BookNotFound(f"Books no longer available: {', '.join(missing)}")

        order = Order.place(
            user_id=command.user_id,
            lines=[(item.book_id, item.quantity, books[str(item.book_id)].unit_price) for item in lines],
            cart_snapshot=cart.snapshot_key,
        )
        try:
            current_domain.repository_for(Order).add(order)
        except ValidationError as exc:
            if "cart_snapshot" not in exc.messages:
                raise
            logger.warning("order.duplicate_checkout", user_id=str(command.user_id), cart_snapshot=order.cart_snapshot)
            raise CartAlreadyCheckedOut() from exc

        cart.check_out()
        cart_repo.add(cart)

        logger.info(
            "order.placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            total_amount=order.total_amount,
            item_count=len(lines),
        )
        return str(order.id)


def checkout(user_id) -> str:
    """Place an order from ``user_id``'s cart and return the new order id.

    Domain rejections (``EmptyCart``, ``BookNotFound``, ``CartAlreadyCheckedOut``)
    propagate unchanged; anything else that aborts the Unit of Work surfaces as ``CheckoutFailed``.
    """
    command = PlaceOrder(user_id=user_id)
    try:
        return process_serialized(user_id, command)
    except BookstoreError:
        raise
    except Exception as exc:
        logger.exception("order.checkout_failed", user_id=str(user_id))
        raise CheckoutFailed() from exc
