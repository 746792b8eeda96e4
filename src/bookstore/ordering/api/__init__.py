"""Cart and order API package."""

from bookstore.ordering.api.routes import admin_orders_router, cart_router, orders_router

__all__ = ["cart_router", "orders_router", "admin_orders_router"]
