"""Administrator load test scenarios.

Needs an existing administrator account, created with
``bookstore-manage create-admin``. Its credentials are read from the
``LOADTEST_ADMIN_EMAIL`` and ``LOADTEST_ADMIN_PASSWORD`` environment variables.
"""

import os
import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import book_data, image_data, order_status
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import AdminState

ADMIN_EMAIL = os.environ.get("LOADTEST_ADMIN_EMAIL", "admin@bookstore.test")
ADMIN_PASSWORD = os.environ.get("LOADTEST_ADMIN_PASSWORD", "admin-password")


class CatalogueStockingJourney(SequentialTaskSet):
    """Add Book -> Set Cover Image -> Update Price -> Review Orders -> Advance an Order."""

    def on_start(self):
        self.state = AdminState()
        with self.client.post(
            "/auth/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
            catch_response=True,
            name="POST /auth/login",
        ) as resp:
            if resp.status_code == 200 and resp.json()["user"]["role"] == "ADMIN":
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Admin login failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_book(self):
        with self.client.post(
            "/books",
            json=book_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /books",
        ) as resp:
            if resp.status_code == 201:
                self.state.book_ids.append(resp.json()["id"])
            else:
                resp.failure(f"Add book failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def set_image(self):
        with self.client.put(
            f"/books/{self.state.book_ids[-1]}/image",
            json=image_data(),
            headers=self.state.headers,
            catch_response=True,
            name="PUT /books/{id}/image",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Set image failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def reprice(self):
        with self.client.put(
            f"/books/{self.state.book_ids[-1]}",
            json=book_data(),
            headers=self.state.headers,
            catch_response=True,
            name="PUT /books/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update book failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def advance_order(self):
        with self.client.get(
            "/admin/orders",
            headers=self.state.headers,
            catch_response=True,
            name="GET /admin/orders",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code} - {extract_error_detail(resp)}")
                return
            orders = resp.json()

        if not orders:
            return
        order_id = random.choice(orders)["id"]
        with self.client.put(
            f"/orders/{order_id}/status",
            json={"status": order_status()},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /orders/{id}/status",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Status update failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class AdminUser(HttpUser):
    """Store staff maintaining the catalogue and moving orders along."""

    wait_time = between(2.0, 5.0)
    tasks = [CatalogueStockingJourney]
