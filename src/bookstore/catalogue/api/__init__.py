"""Catalogue API package."""

from bookstore.catalogue.api.routes import router as books_router

__all__ = ["books_router"]
