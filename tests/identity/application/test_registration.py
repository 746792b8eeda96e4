"""Application tests for account creation and sign-in."""

import pytest
from protean import current_domain

from bookstore.errors import InvalidCredentials, InvalidInput, UserAlreadyExists
from bookstore.identity.credentials import authenticate, hash_password, verify_password
from bookstore.identity.registration import CreateUser, RegisterUser
from bookstore.identity.user import User


def _register(username="jane", email="jane@example.com", password="secret-pass"):
    command = RegisterUser(username=username, email=email, password_hash=hash_password(password))
    user_id = current_domain.process(command, asynchronous=False)
    return current_domain.repository_for(User).get(user_id)


class TestRegisterUser:
    def test_creates_a_user_account(self):
        user = _register()
        assert user.username == "jane"
        assert user.email == "jane@example.com"
        assert user.role == "USER"

    def test_password_is_stored_hashed(self):
        user = _register(password="secret-pass")
        assert user.password_hash != "secret-pass"
        assert verify_password("secret-pass", user.password_hash)

    def test_duplicate_email_rejected_without_new_row(self):
        _register()
        with pytest.raises(UserAlreadyExists):
            _register(username="someone-else", email="JANE@example.com")

        assert len(current_domain.repository_for(User).all_users()) == 1

    def test_concurrent_duplicate_email_is_a_conflict(self, monkeypatch):
        """A writer that passed the availability check loses to the one that committed first."""
        from bookstore.identity import registration

        _register()
        monkeypatch.setattr(registration, "ensure_available", lambda *args, **kwargs: None)

        with pytest.raises(UserAlreadyExists):
            _register(username="someone-else", email="jane@example.com")

        assert len(current_domain.repository_for(User).all_users()) == 1

    def test_concurrent_duplicate_username_is_a_conflict(self, monkeypatch):
        from bookstore.identity import registration

        _register()
        monkeypatch.setattr(registration, "ensure_available", lambda *args, **kwargs: None)

        with pytest.raises(UserAlreadyExists):
            _register(email="other@example.com")

    def test_duplicate_username_rejected(self):
        _register()
        with pytest.raises(UserAlreadyExists):
            _register(email="other@example.com")

    def test_persisted_lookup_by_email_ignores_case(self):
        user = _register()
        found = current_domain.repository_for(User).find_by_email("Jane@Example.COM")
        assert found.id == user.id


class TestCreateUser:
    def test_admin_may_choose_role(self):
        command = CreateUser(
            username="clerk",
            email="clerk@example.com",
            password_hash=hash_password("secret-pass"),
            role="admin",
        )
        user_id = current_domain.process(command, asynchronous=False)
        assert current_domain.repository_for(User).get(user_id).role == "ADMIN"

    def test_unknown_role_rejected(self):
        command = CreateUser(
            username="clerk",
            email="clerk@example.com",
            password_hash=hash_password("secret-pass"),
            role="superuser",
        )
        with pytest.raises(InvalidInput):
            current_domain.process(command, asynchronous=False)


class TestAuthenticate:
    def test_valid_credentials(self):
        _register()
        identity = authenticate("jane@example.com", "secret-pass")
        assert identity.subject == "jane@example.com"
        assert identity.role == "USER"

    def test_wrong_password(self):
        _register()
        with pytest.raises(InvalidCredentials) as exc:
            authenticate("jane@example.com", "wrong")
        wrong_password_message = exc.value.message

        with pytest.raises(InvalidCredentials) as exc:
            authenticate("nobody@example.com", "secret-pass")

        # Unknown emails and wrong passwords are indistinguishable
        assert exc.value.message == wrong_password_message
