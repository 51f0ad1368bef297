"""Storefront load test scenarios.

Browsing is read-only and cache-friendly. The checkout journey is a
SequentialTaskSet: register, sign in, save an address, place a COD order,
list it back and cancel it. Each step depends on the previous one.

Order creation and the contact form are rate limited per client IP, so a
429 from those endpoints is counted as expected behaviour, not a failure.
"""

import random

from locust import HttpUser, SequentialTaskSet, TaskSet, between, task

from loadtests.data_generators import (
    address_data,
    contact_message,
    order_data,
    registration_data,
    review_data,
)
from loadtests.helpers.state import ShopperState

RATE_LIMITED = 429


def load_products(client, state: ShopperState) -> None:
    with client.get("/api/products?limit=50", catch_response=True, name="GET /api/products") as resp:
        if resp.status_code == 200:
            state.products = resp.json()["products"]
        else:
            resp.failure(f"List products failed: {resp.status_code}")


class BrowsingJourney(TaskSet):
    """Anonymous visitor: home page content, listing pages and product pages."""

    def on_start(self):
        self.state = ShopperState()
        load_products(self.client, self.state)

    @task(3)
    def home_page(self):
        self.client.get("/api/carousel", name="GET /api/carousel")
        self.client.get("/api/collections?featured=true", name="GET /api/collections")
        self.client.get("/api/reviews/featured?limit=6", name="GET /api/reviews/featured")
        self.client.get("/api/settings", name="GET /api/settings")

    @task(4)
    def category_page(self):
        self.client.get("/api/categories", name="GET /api/categories")
        if self.state.products:
            category = random.choice(self.state.products)["category"]
            self.client.get(f"/api/products?category={category}", name="GET /api/products?category")

    @task(6)
    def product_page(self):
        if not self.state.products:
            return
        slug = random.choice(self.state.products)["slug"]
        self.client.get(f"/api/products/{slug}", name="GET /api/products/{slug}")
        self.client.get(f"/api/products/{slug}/suggestions", name="GET /api/products/{slug}/suggestions")

    @task(1)
    def offers(self):
        self.client.get("/api/offers", name="GET /api/offers")

    @task(1)
    def leave_review(self):
        product_id = random.choice(self.state.products)["product_id"] if self.state.products else None
        self.client.post("/api/reviews", json=review_data(product_id), name="POST /api/reviews")

    @task(1)
    def contact_us(self):
        with self.client.post(
            "/api/messages", json=contact_message(), catch_response=True, name="POST /api/messages"
        ) as resp:
            if resp.status_code == RATE_LIMITED:
                resp.success()

    @task(1)
    def leave(self):
        self.interrupt()


class CheckoutJourney(SequentialTaskSet):
    """Register -> Login -> Save address -> Place COD order -> My orders -> Cancel."""

    def on_start(self):
        self.state = ShopperState()
        load_products(self.client, self.state)

    @task
    def register(self):
        payload = registration_data()
        with self.client.post(
            "/api/auth/register", json=payload, catch_response=True, name="POST /api/auth/register"
        ) as resp:
            if resp.status_code == 201:
                self.state.email = payload["email"]
                self.state.password = payload["password"]
                self.state.name = payload["name"]
                self.state.phone = payload["phone"]
            else:
                resp.failure(f"Register failed: {resp.status_code}")
                self.interrupt()

    @task
    def login(self):
        with self.client.post(
            "/api/auth/login",
            json={"email": self.state.email, "password": self.state.password},
            catch_response=True,
            name="POST /api/auth/login",
        ) as resp:
            if resp.status_code == 200:
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Login failed: {resp.status_code}")
                self.interrupt()

    @task
    def save_address(self):
        self.client.post(
            "/api/addresses",
            json=address_data(self.state.name, is_default=True),
            headers=self.state.headers,
            name="POST /api/addresses",
        )

    @task
    def place_order(self):
        if not self.state.products:
            self.interrupt()
        with self.client.post(
            "/api/orders/create",
            json=order_data(self.state.products, self.state.customer),
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/orders/create",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            elif resp.status_code == RATE_LIMITED:
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Create order failed: {resp.status_code}")
                self.interrupt()

    @task
    def my_orders(self):
        self.client.get("/api/orders", headers=self.state.headers, name="GET /api/orders")

    @task
    def cancel_order(self):
        if random.random() < 0.3:
            self.client.put(
                f"/api/orders/{self.state.order_id}",
                json={"action": "cancel"},
                headers=self.state.headers,
                name="PUT /api/orders/{id}",
            )
        self.interrupt()


class StorefrontUser(HttpUser):
    """Storefront traffic: mostly browsing, some checkouts."""

    wait_time = between(1, 4)
    tasks = {BrowsingJourney: 8, CheckoutJourney: 2}
