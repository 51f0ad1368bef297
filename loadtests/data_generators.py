"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's validation rules
(email and phone checks, required address fields, review length) and match
the field names the request schemas expect.
"""

import random
import uuid

from faker import Faker

fake = Faker("en_IN")

CATEGORIES = ["Earrings", "Necklaces", "Bracelets", "Rings", "Anklets"]
STATES = ["Karnataka", "Maharashtra", "Tamil Nadu", "Delhi", "Gujarat", "West Bengal", "Telangana"]
FINISHES = ["gold", "silver", "rose-gold", "platinum"]

# ---------- Identity ----------


def valid_email() -> str:
    """Unique per call so registrations never collide."""
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:6]}@example.com"


def valid_phone() -> str:
    """Indian mobile numbers: ten digits starting 6-9."""
    return f"{random.randint(6, 9)}{random.randint(0, 999999999):09d}"


def registration_data() -> dict:
    return {
        "name": fake.name()[:100],
        "email": valid_email(),
        "password": f"lt-{uuid.uuid4().hex[:12]}",
        "phone": valid_phone(),
    }


def address_data(name: str, is_default: bool = False) -> dict:
    return {
        "name": name,
        "phone": valid_phone(),
        "address_line1": fake.street_address()[:120],
        "city": fake.city(),
        "state": random.choice(STATES),
        "pincode": fake.postcode(),
        "country": "India",
        "is_default": is_default,
    }


# ---------- Catalogue ----------


def product_data() -> dict:
    title = f"{fake.word().title()} {random.choice(['Jhumka', 'Choker', 'Kada', 'Payal', 'Haar'])}"
    return {
        "title": title,
        "category": random.choice(CATEGORIES),
        "slug": f"{title.lower().replace(' ', '-')}-{uuid.uuid4().hex[:6]}",
        "price": random.choice([799, 1299, 1899, 2499, 3499]),
        "stock_qty": random.randint(5, 50),
        "metal_finish": random.choice(FINISHES),
        "description": fake.sentence(nb_words=12),
        "tags": random.sample(["festive", "bridal", "daily", "kundan", "temple"], k=2),
    }


# ---------- Ordering ----------


def order_items(products: list[dict], max_items: int = 3) -> list[dict]:
    """Order lines for up to ``max_items`` products picked from a catalogue listing."""
    picked = random.sample(products, k=min(len(products), random.randint(1, max_items)))
    return [
        {
            "product_id": product["product_id"],
            "sku": product.get("sku"),
            "title": product["title"],
            "quantity": random.randint(1, 2),
            "price": product["price"],
        }
        for product in picked
    ]


def order_data(products: list[dict], customer: dict, payment_method: str = "cod") -> dict:
    items = order_items(products)
    subtotal = sum(item["price"] * item["quantity"] for item in items)
    shipping = 0 if subtotal >= 999 else 99
    return {
        "items": items,
        "customer": {"name": customer["name"], "email": customer["email"], "phone": customer.get("phone")},
        "shipping_address": address_data(customer["name"]),
        "subtotal": subtotal,
        "shipping": shipping,
        "total": subtotal + shipping,
        "payment_method": payment_method,
    }


# ---------- Reviews & support ----------


def review_data(product_id: str | None = None) -> dict:
    return {
        "customer_name": fake.name()[:100],
        "customer_email": valid_email(),
        "rating": random.choices([5, 4, 3, 2, 1], weights=[50, 30, 10, 6, 4])[0],
        "review_text": fake.paragraph(nb_sentences=2),
        "product_id": product_id,
    }


def contact_message() -> dict:
    return {
        "name": fake.name()[:100],
        "email": valid_email(),
        "phone": valid_phone(),
        "message": fake.paragraph(nb_sentences=3),
    }
