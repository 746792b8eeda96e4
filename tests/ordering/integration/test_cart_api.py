"""Integration tests for the cart endpoints."""

import pytest


@pytest.fixture
def jane(make_user, auth_headers):
    user = make_user(username="jane")
    return user, auth_headers(user)


class TestCart:
    def test_empty_cart(self, client, jane):
        _, headers = jane
        assert client.get("/cart", headers=headers).json() == {"items": [], "total": "0.00"}

    def test_add_returns_the_line(self, client, jane, make_book):
        _, headers = jane
        book = make_book(title="Dune", price="9.99", image="/covers/dune.png")

        response = client.post("/cart/add", json={"bookId": str(book.id), "quantity": 2}, headers=headers)

        assert response.status_code == 200
        line = response.json()
        assert line["bookId"] == str(book.id)
        assert line["title"] == "Dune"
        assert line["quantity"] == 2
        assert line["price"] == "9.99"
        assert line["image"] == "/covers/dune.png"

    def test_adding_twice_merges(self, client, jane, make_book):
        _, headers = jane
        book = make_book(price="10.00")
        client.post("/cart/add", json={"bookId": str(book.id), "quantity": 2}, headers=headers)
        client.post("/cart/add", json={"bookId": str(book.id), "quantity": 3}, headers=headers)

        cart = client.get("/cart", headers=headers).json()
        assert len(cart["items"]) == 1
        assert cart["items"][0]["quantity"] == 5
        assert cart["total"] == "50.00"

    def test_quantity_must_be_positive(self, client, jane, make_book):
        _, headers = jane
        response = client.post("/cart/add", json={"bookId": str(make_book().id), "quantity": 0}, headers=headers)
        assert response.status_code == 400

    def test_unknown_book(self, client, jane):
        _, headers = jane
        response = client.post("/cart/add", json={"bookId": "missing", "quantity": 1}, headers=headers)
        assert response.status_code == 404
        assert response.json()["error"] == "BookNotFound"

    def test_update_and_remove(self, client, jane, make_book):
        _, headers = jane
        line = client.post("/cart/add", json={"bookId": str(make_book().id), "quantity": 1}, headers=headers).json()

        updated = client.put(f"/cart/update/{line['id']}", params={"quantity": 4}, headers=headers)
        assert updated.json()["quantity"] == 4

        removed = client.delete(f"/cart/remove/{line['id']}", headers=headers)
        assert removed.status_code == 200
        assert client.get("/cart", headers=headers).json()["items"] == []

    def test_someone_elses_line(self, client, jane, make_user, auth_headers, make_book):
        _, headers = jane
        line = client.post("/cart/add", json={"bookId": str(make_book().id), "quantity": 1}, headers=headers).json()
        intruder = auth_headers(make_user(username="mallory"))

        assert client.put(f"/cart/update/{line['id']}", params={"quantity": 9}, headers=intruder).status_code == 403
        assert client.delete(f"/cart/remove/{line['id']}", headers=intruder).status_code == 403
        assert client.get("/cart", headers=headers).json()["items"][0]["quantity"] == 1

    def test_unknown_line(self, client, jane):
        _, headers = jane
        response = client.delete("/cart/remove/missing", headers=headers)
        assert response.status_code == 404
        assert response.json()["error"] == "CartItemNotFound"

    def test_clear(self, client, jane, make_book):
        _, headers = jane
        client.post("/cart/add", json={"bookId": str(make_book().id), "quantity": 1}, headers=headers)

        assert client.delete("/cart/clear", headers=headers).status_code == 200
        assert client.delete("/cart/clear", headers=headers).status_code == 200
        assert client.get("/cart", headers=headers).json()["items"] == []


class TestLineGoneBeforeResponse:
    """Another request from the same user empties the cart between the command and the re-read."""

    def test_add_then_cart_cleared(self, client, jane, make_book, monkeypatch):
        from bookstore.ordering.cart import items

        original = items.add_to_cart

        def add_then_clear(user_id, book_id, quantity):
            item_id = original(user_id, book_id, quantity)
            items.clear_cart(user_id)
            return item_id

        monkeypatch.setattr(items, "add_to_cart", add_then_clear)
        _, headers = jane

        response = client.post("/cart/add", json={"bookId": str(make_book().id), "quantity": 1}, headers=headers)

        assert response.status_code == 404
        assert response.json()["error"] == "CartItemNotFound"

    def test_update_then_line_removed(self, client, jane, make_book, monkeypatch):
        from bookstore.ordering.cart import items

        _, headers = jane
        line = client.post("/cart/add", json={"bookId": str(make_book().id), "quantity": 1}, headers=headers).json()
        original = items.update_quantity

        def update_then_remove(user_id, item_id, quantity):
            result = original(user_id, item_id, quantity)
            items.remove_item(user_id, item_id)
            return result

        monkeypatch.setattr(items, "update_quantity", update_then_remove)

        response = client.put(f"/cart/update/{line['id']}", params={"quantity": 3}, headers=headers)

        assert response.status_code == 404
        assert response.json()["error"] == "CartItemNotFound"
