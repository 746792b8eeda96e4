"""Application tests for administrator maintenance of accounts."""

import pytest
from protean import current_domain

from bookstore.errors import InvalidInput, UserAlreadyExists, UserHasOrders, UserNotFound
from bookstore.identity.administration import RemoveUser, UpdateUser
from bookstore.identity.user import User
from bookstore.ordering.cart.cart import Cart
from bookstore.ordering.cart.items import add_to_cart
from bookstore.ordering.order.checkout import checkout


def _update(user_id, **changes):
    current_domain.process(UpdateUser(user_id=user_id, **changes), asynchronous=False)
    return current_domain.repository_for(User).get(user_id)


class TestUpdateUser:
    def test_update_username_email_and_role(self, make_user):
        user = make_user(username="jane")
        updated = _update(user.id, username="janet", email="Janet@Example.com", role="ADMIN")

        assert updated.username == "janet"
        assert updated.email == "janet@example.com"
        assert updated.role == "ADMIN"

    def test_untouched_fields_are_kept(self, make_user):
        user = make_user(username="jane")
        updated = _update(user.id, role="admin")
        assert updated.username == "jane"
        assert updated.email == user.email

    def test_username_taken_by_another_user(self, make_user):
        make_user(username="taken")
        user = make_user(username="jane")
        with pytest.raises(UserAlreadyExists):
            _update(user.id, username="taken")

    def test_keeping_own_email_is_not_a_conflict(self, make_user):
        user = make_user(username="jane")
        assert _update(user.id, email=user.email).email == user.email

    def test_unknown_role(self, make_user):
        user = make_user()
        with pytest.raises(InvalidInput):
            _update(user.id, role="owner")

    def test_unknown_user(self):
        with pytest.raises(UserNotFound):
            _update("missing-user")


class TestRemoveUser:
    def test_removes_the_account(self, make_user):
        user = make_user()
        current_domain.process(RemoveUser(user_id=user.id), asynchronous=False)
        assert current_domain.repository_for(User).find_by_email(user.email) is None

    def test_discards_the_users_cart(self, make_user, make_book):
        user = make_user()
        book = make_book()
        add_to_cart(str(user.id), str(book.id), 1)

        current_domain.process(RemoveUser(user_id=user.id), asynchronous=False)

        cart_repo = current_domain.repository_for(Cart)
        assert cart_repo.for_user(user.id) is None
        assert not cart_repo.references_book(book.id)

    def test_user_with_orders_cannot_be_removed(self, make_user, make_book):
        user = make_user()
        add_to_cart(str(user.id), str(make_book().id), 1)
        checkout(str(user.id))

        with pytest.raises(UserHasOrders):
            current_domain.process(RemoveUser(user_id=user.id), asynchronous=False)
        assert current_domain.repository_for(User).get(user.id) is not None

    def test_unknown_user(self):
        with pytest.raises(UserNotFound):
            current_domain.process(RemoveUser(user_id="missing-user"), asynchronous=False)
