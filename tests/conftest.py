import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the configuration overlay before anything imports the domain."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _bookstore_domain():
    """Initialize the bookstore domain once per session."""
    from bookstore.domain import bookstore

    bookstore.init()
    return bookstore


@pytest.fixture(scope="session", autouse=True)
def setup_db(_bookstore_domain):
    from bookstore.utils.db import drop_db, setup_db

    setup_db(_bookstore_domain)

    yield

    drop_db(_bookstore_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_bookstore_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _bookstore_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Factories shared by every layer
# ---------------------------------------------------------------------------
@pytest.fixture
def make_user():
    """Create a persisted user through the CreateUser command."""
    from protean import current_domain

    from bookstore.identity.credentials import hash_password
    from bookstore.identity.registration import CreateUser
    from bookstore.identity.user import User

    counter = {"n": 0}

    def _make(username=None, email=None, password="secret-pass", role="USER"):
        counter["n"] += 1
        username = username or f"reader{counter['n']}"
        email = email or f"{username}@example.com"
        user_id = current_domain.process(
            CreateUser(username=username, email=email, password_hash=hash_password(password), role=role),
            asynchronous=False,
        )
        return current_domain.repository_for(User).get(user_id)

    return _make


@pytest.fixture
def make_book():
    """Create a persisted book through the AddBook command."""
    from protean import current_domain

    from bookstore.catalogue.book import Book
    from bookstore.catalogue.management import AddBook

    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        details = {
            "title": f"Book {counter['n']:03d}",
            "author": "Ada Writer",
            "isbn": f"978000000{counter['n']:04d}",
            "price": "10.00",
            "stock": 5,
            "genre": "Fiction",
        }
        details.update(overrides)
        book_id = current_domain.process(AddBook(**details), asynchronous=False)
        return current_domain.repository_for(Book).get(book_id)

    return _make


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture
def client(_bookstore_domain):
    from fastapi.testclient import TestClient

    from bookstore.api.application import create_app

    return TestClient(create_app(_bookstore_domain))


@pytest.fixture
def auth_headers(client):
    """Authorization headers carrying a freshly issued token for ``user``."""
    from bookstore.identity.tokens import Identity

    def _headers(user):
        token = client.app.state.tokens.issue(Identity.of(user))
        return {"Authorization": f"Bearer {token}"}

    return _headers
