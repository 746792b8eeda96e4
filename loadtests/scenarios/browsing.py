"""Anonymous catalogue browsing scenario.

Public reads only: book pages, the genre list, genre pages and single
book details. No token is ever sent.
"""

import random

from locust import HttpUser, TaskSet, between, task

from loadtests.helpers.response import extract_error_detail


class CatalogueBrowsing(TaskSet):
    """A visitor paging through the catalogue without an account."""

    def on_start(self):
        self.book_ids: list[str] = []
        self.genres: list[str] = []

    @task(5)
    def list_books(self):
        page = random.randint(0, 3)
        with self.client.get(
            f"/books?page={page}&size=10",
            catch_response=True,
            name="GET /books",
        ) as resp:
            if resp.status_code == 200:
                self.book_ids = [book["id"] for book in resp.json()["content"]] or self.book_ids
            else:
                resp.failure(f"List books failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task(2)
    def list_categories(self):
        with self.client.get("/books/categories", catch_response=True, name="GET /books/categories") as resp:
            if resp.status_code == 200:
                self.genres = resp.json()
            else:
                resp.failure(f"List categories failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task(2)
    def browse_category(self):
        if not self.genres:
            return
        with self.client.get(
            f"/books/category/{random.choice(self.genres)}",
            catch_response=True,
            name="GET /books/category/{genre}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Browse category failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task(3)
    def view_book(self):
        if not self.book_ids:
            return
        with self.client.get(
            f"/books/{random.choice(self.book_ids)}",
            catch_response=True,
            name="GET /books/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View book failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task(1)
    def leave(self):
        self.interrupt()


class BrowsingUser(HttpUser):
    wait_time = between(0.5, 2.0)
    tasks = [CatalogueBrowsing]
