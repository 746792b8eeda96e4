"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
and match the camelCase field names of the API's Pydantic request schemas.
"""

import random
import uuid
from decimal import Decimal

from faker import Faker

fake = Faker()

GENRES = ["Fiction", "Science", "History", "Programming", "Poetry", "Travel"]

# ---------- Identity ----------


def unique_username() -> str:
    """Usernames are unique, so every generated one carries a random suffix."""
    return f"{fake.user_name()[:30]}_{uuid.uuid4().hex[:6]}"


def valid_email() -> str:
    """Generate emails with a single @ and a dotted domain."""
    local = fake.user_name()[:20]
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:4]}@{domain}"


def password() -> str:
    return fake.password(length=14)


def registration_data() -> dict:
    return {"username": unique_username(), "email": valid_email(), "password": password()}


# ---------- Catalogue ----------


def isbn13() -> str:
    return fake.isbn13(separator="")


def price(low: int = 5, high: int = 80) -> str:
    cents = random.randint(low * 100, high * 100)
    return str(Decimal(cents) / 100)


def book_data() -> dict:
    """Generate BookRequest payloads; half of them carry a list price above the selling price."""
    selling = price()
    payload = {
        "title": fake.sentence(nb_words=4).rstrip(".")[:255],
        "author": fake.name()[:255],
        "isbn": isbn13(),
        "description": fake.paragraph(nb_sentences=3),
        "genre": random.choice(GENRES),
        "stock": random.randint(0, 50),
        "price": selling,
    }
    if random.random() < 0.5:
        payload["originalPrice"] = str(Decimal(selling) + Decimal("5.00"))
    return payload


def image_data() -> dict:
    return {"image": fake.image_url()}


# ---------- Ordering ----------


def cart_item_data(book_id: str) -> dict:
    return {"bookId": book_id, "quantity": random.randint(1, 3)}


def order_status() -> str:
    return random.choice(["PROCESSING", "SHIPPED", "DELIVERED"])
