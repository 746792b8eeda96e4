"""Tests for the access rules consulted by the gate."""

import pytest

from bookstore.api.access import ROUTING_TABLE, Requirement, Rule, resolve
from bookstore.identity.tokens import Identity

USER = Identity(subject="jane@example.com", role="USER")
ADMIN = Identity(subject="root@example.com", role="ADMIN")


class TestResolve:
    @pytest.mark.parametrize(
        "method, path, requirement",
        [
            ("GET", "/health", Requirement.PUBLIC),
            ("POST", "/auth/login", Requirement.PUBLIC),
            ("POST", "/auth/register", Requirement.PUBLIC),
            ("GET", "/auth/me", Requirement.AUTHENTICATED),
            ("GET", "/books", Requirement.PUBLIC),
            ("GET", "/books/42", Requirement.PUBLIC),
            ("GET", "/books/category/Sci-Fi", Requirement.PUBLIC),
            ("POST", "/books", Requirement.ADMIN),
            ("PUT", "/books/42/image", Requirement.ADMIN),
            ("DELETE", "/books/42", Requirement.ADMIN),
            ("GET", "/cart", Requirement.USER),
            ("DELETE", "/cart/remove/7", Requirement.USER),
            ("POST", "/orders/checkout", Requirement.USER),
            ("GET", "/orders/me", Requirement.USER),
            ("GET", "/orders", Requirement.ADMIN),
            ("PUT", "/orders/42/status", Requirement.ADMIN),
            ("GET", "/admin/users", Requirement.ADMIN),
            ("DELETE", "/admin/users/42", Requirement.ADMIN),
        ],
    )
    def test_declared_requirements(self, method, path, requirement):
        assert resolve(method, path) is requirement

    def test_unknown_paths_require_authentication(self):
        assert resolve("GET", "/somewhere/else") is Requirement.AUTHENTICATED

    def test_method_matters(self):
        assert resolve("GET", "/auth/login") is Requirement.AUTHENTICATED

    def test_first_match_wins(self):
        table = (Rule("GET", "/x/**", Requirement.PUBLIC), Rule("GET", "/x/{id}", Requirement.ADMIN))
        assert resolve("GET", "/x/1", table) is Requirement.PUBLIC

    def test_placeholders_match_one_segment(self):
        rule = Rule("PUT", "/orders/{order_id}/status", Requirement.ADMIN)
        assert rule.matches("PUT", "/orders/abc/status")
        assert not rule.matches("PUT", "/orders/a/b/status")

    def test_double_star_covers_the_prefix_itself(self):
        rule = Rule("*", "/cart/**", Requirement.USER)
        assert rule.matches("GET", "/cart")
        assert rule.matches("DELETE", "/cart/remove/1")
        assert not rule.matches("GET", "/carts")

    def test_table_is_immutable(self):
        assert isinstance(ROUTING_TABLE, tuple)
        with pytest.raises(AttributeError):
            ROUTING_TABLE[0].requirement = Requirement.ADMIN


class TestRequirements:
    def test_public_admits_anyone(self):
        assert Requirement.PUBLIC.admits(None)

    def test_authenticated_needs_an_identity(self):
        assert not Requirement.AUTHENTICATED.admits(None)
        assert Requirement.AUTHENTICATED.admits(USER)

    def test_roles_are_exact(self):
        assert Requirement.USER.admits(USER)
        assert not Requirement.USER.admits(ADMIN)
        assert Requirement.ADMIN.admits(ADMIN)
        assert not Requirement.ADMIN.admits(USER)
