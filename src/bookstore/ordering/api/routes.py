"""FastAPI endpoints for the shopping cart and orders."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from bookstore.api.dependencies import current_user
from bookstore.api.schemas import MessageResponse
from bookstore.catalogue.book import Book
from bookstore.errors import CartItemNotFound
from bookstore.identity.user import User
from bookstore.ordering.api.schemas import (
    AddToCartRequest,
    CartLineRecord,
    CartRecord,
    OrderRecord,
    UpdateStatusRequest,
    cart_line_record,
    cart_record,
    order_record,
)
from bookstore.ordering.cart import items as cart_items
from bookstore.ordering.cart.cart import Cart
from bookstore.ordering.order.checkout import checkout
from bookstore.ordering.order.order import Order
from bookstore.ordering.order.status import UpdateOrderStatus

cart_router = APIRouter(prefix="/cart", tags=["cart"])
orders_router = APIRouter(prefix="/orders", tags=["orders"])
admin_orders_router = APIRouter(prefix="/admin/orders", tags=["admin"], dependencies=[Depends(current_user)])


def _cart_line(user: User, item_id: str) -> CartLineRecord:
    """Re-read a line after its command released the user's lock; it may be gone by now."""
    cart = current_domain.repository_for(Cart).for_user(user.id)
    item = cart.item(item_id) if cart is not None else None
    if item is None:
        raise CartItemNotFound(f"Cart item {item_id} not found")
    book = current_domain.repository_for(Book).by_ids([item.book_id]).get(str(item.book_id))
    return cart_line_record(item, book)


# --- Cart ---


@cart_router.get("", response_model=CartRecord)
def get_cart(user: User = Depends(current_user)) -> CartRecord:
    cart = current_domain.repository_for(Cart).for_user(user.id)
    book_ids = [item.book_id for item in cart.items] if cart is not None else []
    return cart_record(cart, current_domain.repository_for(Book).by_ids(book_ids))


@cart_router.post("/add", response_model=CartLineRecord)
def add_to_cart(body: AddToCartRequest, user: User = Depends(current_user)) -> CartLineRecord:
    item_id = cart_items.add_to_cart(str(user.id), body.book_id, body.quantity)
    return _cart_line(user, item_id)


@cart_router.put("/update/{item_id}", response_model=CartLineRecord)
def update_cart_item(item_id: str, quantity: int = Query(..., ge=1), user: User = Depends(current_user)) -> CartLineRecord:
    cart_items.update_quantity(str(user.id), item_id, quantity)
    return _cart_line(user, item_id)


@cart_router.delete("/remove/{item_id}", response_model=MessageResponse)
def remove_cart_item(item_id: str, user: User = Depends(current_user)) -> MessageResponse:
    cart_items.remove_item(str(user.id), item_id)
    return MessageResponse(message="Item removed from cart")


@cart_router.delete("/clear", response_model=MessageResponse)
def clear_cart(user: User = Depends(current_user)) -> MessageResponse:
    cart_items.clear_cart(str(user.id))
    return MessageResponse(message="Cart cleared")


# --- Orders ---


@orders_router.post("/checkout", status_code=201, response_model=OrderRecord)
def place_order(user: User = Depends(current_user)) -> OrderRecord:
    order_id = checkout(str(user.id))
    return order_record(current_domain.repository_for(Order).view(order_id))


@orders_router.get("/me", response_model=list[OrderRecord])
def my_orders(user: User = Depends(current_user)) -> list[OrderRecord]:
    return [order_record(view) for view in current_domain.repository_for(Order).for_user(user.id)]


@orders_router.get("", response_model=list[OrderRecord], dependencies=[Depends(current_user)])
def all_orders() -> list[OrderRecord]:
    return [order_record(view) for view in current_domain.repository_for(Order).newest_first()]


@orders_router.put("/{order_id}/status", response_model=OrderRecord, dependencies=[Depends(current_user)])
def update_order_status(order_id: str, body: UpdateStatusRequest) -> OrderRecord:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return order_record(current_domain.repository_for(Order).view(order_id))


@admin_orders_router.get("", response_model=list[OrderRecord])
def admin_orders() -> list[OrderRecord]:
    return [order_record(view) for view in current_domain.repository_for(Order).newest_first()]
