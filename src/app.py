"""Bookstore ASGI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload

PROTEAN_ENV selects the configuration overlay of ``bookstore/domain.toml``
(development when unset, ``test`` or ``production``).
"""

from bookstore.api.application import create_app
from bookstore.domain import bookstore

# Initialized at module level so uvicorn workers share it
bookstore.init()

app = create_app(bookstore)
