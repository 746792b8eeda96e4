"""Pydantic request/response schemas for cart and order endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from bookstore.api.schemas import CamelModel
from bookstore.catalogue.api.schemas import BookRecord, book_record
from bookstore.shared.money import line_total, sum_amounts

# --- Request Schemas ---


class AddToCartRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"bookId": "3f0e2a4c-...", "quantity": 2}]}}

    book_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)


class UpdateStatusRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "SHIPPED"}]}}

    status: str = Field(..., min_length=1, max_length=50)


# --- Response Schemas ---


class CartLineRecord(CamelModel):
    id: str
    book_id: str
    title: str | None = None
    quantity: int
    price: Decimal | None = None
    image: str | None = None


class CartRecord(CamelModel):
    items: list[CartLineRecord]
    total: Decimal


class OrderItemRecord(CamelModel):
    id: str
    quantity: int
    price: Decimal
    book: BookRecord | None = None


class OrderRecord(CamelModel):
    id: str
    order_date: datetime
    status: str
    total_amount: Decimal
    user_id: str
    order_items: list[OrderItemRecord]


# --- Mappers ---


def cart_line_record(item, book) -> CartLineRecord:
    return CartLineRecord(
        id=str(item.id),
        book_id=str(item.book_id),
        title=book.title if book else None,
        quantity=item.quantity,
        price=book.unit_price if book else None,
        image=book.image if book else None,
    )


def cart_record(cart, books) -> CartRecord:
    items = list(cart.items) if cart is not None else []
    lines = [cart_line_record(item, books.get(str(item.book_id))) for item in items]
    total = sum_amounts(line_total(line.price, line.quantity) for line in lines if line.price is not None)
    return CartRecord(items=lines, total=total)


def order_record(view) -> OrderRecord:
    order = view.order
    return OrderRecord(
        id=str(order.id),
        order_date=order.order_date,
        status=order.status,
        total_amount=order.total,
        user_id=str(order.user_id),
        order_items=[
            OrderItemRecord(
                id=str(item.id),
                quantity=item.quantity,
                price=item.unit_price,
                book=book_record(view.book(item.book_id)) if view.book(item.book_id) else None,
            )
            for item in view.items
        ],
    )
