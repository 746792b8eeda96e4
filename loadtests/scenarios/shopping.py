"""Shopper load test scenarios.

A stateful SequentialTaskSet walks a new customer from registration to a
placed order. Steps execute in order and each depends on the previous
one succeeding, so any failure interrupts the journey.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, registration_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class CheckoutJourney(SequentialTaskSet):
    """Register -> Browse -> Add Items -> Change Quantity -> View Cart -> Checkout -> Order History.

    Exercises the per-user cart lock and the checkout transaction end-to-end.
    """

    def on_start(self):
        self.state = ShopperState()

    @task
    def register(self):
        with self.client.post(
            "/auth/register",
            json=registration_data(),
            catch_response=True,
            name="POST /auth/register",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.token = body["token"]
                self.state.user_id = body["user"]["id"]
            else:
                resp.failure(f"Registration failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse(self):
        with self.client.get("/books?size=20", catch_response=True, name="GET /books") as resp:
            if resp.status_code != 200:
                resp.failure(f"Browse failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()
                return
            in_stock = [book["id"] for book in resp.json()["content"] if book["stock"] > 0]
            if not in_stock:
                resp.success()
                self.interrupt()
                return
            self.state.book_ids = random.sample(in_stock, min(2, len(in_stock)))

    @task
    def add_items(self):
        for book_id in self.state.book_ids:
            with self.client.post(
                "/cart/add",
                json=cart_item_data(book_id),
                headers=self.state.headers,
                catch_response=True,
                name="POST /cart/add",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart_item_ids.append(resp.json()["id"])
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")

        if not self.state.cart_item_ids:
            self.interrupt()

    @task
    def change_quantity(self):
        item_id = self.state.cart_item_ids[0]
        with self.client.put(
            f"/cart/update/{item_id}?quantity={random.randint(1, 4)}",
            headers=self.state.headers,
            catch_response=True,
            name="PUT /cart/update/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update quantity failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def view_cart(self):
        with self.client.get("/cart", headers=self.state.headers, catch_response=True, name="GET /cart") as resp:
            if resp.status_code != 200:
                resp.failure(f"View cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def checkout(self):
        with self.client.post(
            "/orders/checkout",
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["id"])
            else:
                resp.failure(f"Checkout failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def order_history(self):
        with self.client.get(
            "/orders/me",
            headers=self.state.headers,
            catch_response=True,
            name="GET /orders/me",
        ) as resp:
            if resp.status_code == 200:
                placed = {order["id"] for order in resp.json()}
                if not set(self.state.order_ids) <= placed:
                    resp.failure("Placed order missing from history")
            else:
                resp.failure(f"Order history failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Customers who register, fill a cart and check out."""

    wait_time = between(1.0, 3.0)
    tasks = [CheckoutJourney]
