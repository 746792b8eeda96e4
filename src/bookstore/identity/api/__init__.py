from bookstore.identity.api.routes import admin_users_router, auth_router

__all__ = ["auth_router", "admin_users_router"]
