"""Shared BDD fixtures and step definitions for ordering."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then, when

from bookstore.ordering.cart.cart import Cart
from bookstore.ordering.cart.items import add_to_cart
from bookstore.ordering.order.checkout import checkout
from bookstore.ordering.order.order import Order


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def shop():
    """Scenario state: shoppers and books by name, the last placed order."""
    return {"users": {}, "books": {}, "order_id": None}


def placed_order(shop) -> Order:
    assert shop["order_id"] is not None, "no order was placed"
    return current_domain.repository_for(Order).get(shop["order_id"])


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a shopper named "{name}"'))
def a_shopper(shop, make_user, name):
    shop["users"][name] = make_user(username=name)


@given(parsers.cfparse('the catalogue contains "{title}" priced at "{price}"'))
def a_book(shop, make_book, title, price):
    shop["books"][title] = make_book(title=title, price=price)


@given(parsers.cfparse('"{name}" has {quantity:d} copies of "{title}" in the cart'))
@given(parsers.cfparse('"{name}" has {quantity:d} copy of "{title}" in the cart'))
def books_in_cart(shop, name, quantity, title):
    add_to_cart(str(shop["users"][name].id), str(shop["books"][title].id), quantity)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('"{name}" checks out'))
@when(parsers.cfparse('"{name}" checks out'))
def checks_out(shop, error, name):
    try:
        shop["order_id"] = checkout(str(shop["users"][name].id))
    except Exception as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order is "{status}"'))
def order_status(shop, status):
    assert placed_order(shop).status == status


@then(parsers.cfparse('the cart of "{name}" is empty'))
def cart_is_empty(shop, name):
    cart = current_domain.repository_for(Cart).for_user(shop["users"][name].id)
    assert cart.is_empty


@then(parsers.cfparse('"{name}" has no orders'))
def no_orders(shop, name):
    assert current_domain.repository_for(Order).for_user(shop["users"][name].id) == []

