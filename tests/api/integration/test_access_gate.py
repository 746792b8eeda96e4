"""Integration tests for request-level access control."""

from datetime import UTC, datetime, timedelta

from bookstore.identity.tokens import Identity, TokenService


class TestWithoutToken:
    def test_public_routes_are_open(self, client):
        assert client.get("/books").status_code == 200
        assert client.get("/health").status_code == 200

    def test_protected_routes_answer_401(self, client):
        for method, path in [("GET", "/cart"), ("POST", "/orders/checkout"), ("GET", "/admin/users")]:
            response = client.request(method, path)
            assert response.status_code == 401, path
            assert response.json() == {"status": 401, "error": "Unauthenticated", "message": "Authentication required"}

    def test_unknown_routes_require_authentication(self, client):
        assert client.get("/not-a-route").status_code == 401


class TestBadTokens:
    def test_garbage_token_is_refused_even_on_public_routes(self, client):
        response = client.get("/books", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401
        assert response.json()["error"] == "MalformedToken"

    def test_expired_token(self, client, make_user):
        user = make_user()
        token = client.app.state.tokens.issue(Identity.of(user), now=datetime.now(UTC) - timedelta(days=2))

        response = client.get("/books", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["error"] == "ExpiredToken"

    def test_foreign_signature(self, client, make_user):
        forger = TokenService(secret_key="somebody-elses-secret-0123456789abcdef")
        token = forger.issue(Identity.of(make_user()))

        response = client.get("/cart", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["error"] == "InvalidSignature"

    def test_non_bearer_scheme(self, client):
        response = client.get("/books", headers={"Authorization": "Basic amFuZTpzZWNyZXQ="})
        assert response.status_code == 401


class TestRoles:
    def test_user_cannot_reach_admin_routes(self, client, make_user, auth_headers):
        headers = auth_headers(make_user())

        for method, path in [("GET", "/admin/users"), ("GET", "/orders"), ("POST", "/books")]:
            response = client.request(method, path, headers=headers, json={})
            assert response.status_code == 403, path
            assert response.json()["error"] == "Forbidden"

    def test_admin_cannot_use_a_cart(self, client, make_user, auth_headers):
        headers = auth_headers(make_user(role="ADMIN"))
        assert client.get("/cart", headers=headers).status_code == 403

    def test_matching_role_passes(self, client, make_user, auth_headers):
        assert client.get("/cart", headers=auth_headers(make_user())).status_code == 200
        assert client.get("/admin/users", headers=auth_headers(make_user(role="ADMIN"))).status_code == 200

    def test_stale_role_claim_is_refused(self, client, make_user, auth_headers):
        from protean import current_domain

        from bookstore.identity.administration import UpdateUser

        admin = make_user(role="ADMIN")
        headers = auth_headers(admin)
        current_domain.process(UpdateUser(user_id=admin.id, role="USER"), asynchronous=False)

        assert client.get("/admin/users", headers=headers).status_code == 401


class TestService:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok", "domain": "bookstore"}

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"
