"""Back-office load test scenarios.

Staff sign in with the account named by ``LOADTEST_STAFF_USERNAME`` and
``LOADTEST_STAFF_PASSWORD`` (a superadmin, so task assignment and product
creation are allowed). Create one with ``python src/manage.py create-admin``
before running these.
"""

import os
import random

from locust import HttpUser, SequentialTaskSet, TaskSet, between, task

from loadtests.data_generators import product_data
from loadtests.helpers.state import BackOfficeState

STAFF_USERNAME = os.getenv("LOADTEST_STAFF_USERNAME", "loadtest")
STAFF_PASSWORD = os.getenv("LOADTEST_STAFF_PASSWORD", "loadtest-pass")


def staff_login(client, state: BackOfficeState) -> bool:
    with client.post(
        "/api/admin/login",
        json={"username": STAFF_USERNAME, "password": STAFF_PASSWORD},
        catch_response=True,
        name="POST /api/admin/login",
    ) as resp:
        if resp.status_code == 200:
            state.token = resp.json()["token"]
            return True
        resp.failure(f"Staff login failed: {resp.status_code}")
        return False


class DashboardJourney(TaskSet):
    """Dashboard polling: stats, order queue, customers and inbox."""

    def on_start(self):
        self.state = BackOfficeState()
        if not staff_login(self.client, self.state):
            self.interrupt()

    @task(5)
    def stats(self):
        self.client.get("/api/admin/stats", headers=self.state.headers, name="GET /api/admin/stats")

    @task(4)
    def order_queue(self):
        status = random.choice(["pending", "confirmed", "processing", "packed"])
        self.client.get(
            f"/api/admin/orders?status={status}", headers=self.state.headers, name="GET /api/admin/orders?status"
        )

    @task(2)
    def customers(self):
        self.client.get("/api/admin/customers", headers=self.state.headers, name="GET /api/admin/customers")

    @task(1)
    def inbox(self):
        self.client.get("/api/admin/messages?unread=true", headers=self.state.headers, name="GET /api/admin/messages")

    @task(1)
    def leave(self):
        self.interrupt()


class PackingJourney(SequentialTaskSet):
    """Pick a confirmed order -> Assign packing -> Start -> Complete -> Check workflow."""

    def on_start(self):
        self.state = BackOfficeState()
        if not staff_login(self.client, self.state):
            self.interrupt()

    @task
    def pick_order(self):
        with self.client.get(
            "/api/admin/orders?status=confirmed",
            headers=self.state.headers,
            catch_response=True,
            name="GET /api/admin/orders?status",
        ) as resp:
            orders = resp.json().get("orders", []) if resp.status_code == 200 else []
            if not orders:
                resp.success()
                self.interrupt()
            self.state.order_ids = [random.choice(orders)["id"]]

    @task
    def assign_packing(self):
        with self.client.post(
            "/api/admin/tasks",
            json={"order_id": self.state.order_ids[0], "assigned_to": STAFF_USERNAME, "type": "packing"},
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/admin/tasks",
        ) as resp:
            if resp.status_code == 201:
                self.state.task_ids.append(resp.json()["task"]["id"])
            else:
                resp.failure(f"Assign task failed: {resp.status_code}")
                self.interrupt()

    @task
    def start_task(self):
        self.client.put(
            f"/api/admin/tasks/{self.state.task_ids[-1]}",
            json={"status": "in_progress"},
            headers=self.state.headers,
            name="PUT /api/admin/tasks/{id}",
        )

    @task
    def complete_task(self):
        self.client.put(
            f"/api/admin/tasks/{self.state.task_ids[-1]}",
            json={"status": "completed", "notes": "Packed by load test"},
            headers=self.state.headers,
            name="PUT /api/admin/tasks/{id}",
        )

    @task
    def check_workflow(self):
        self.client.get(
            f"/api/admin/orders/{self.state.order_ids[0]}/workflow",
            headers=self.state.headers,
            name="GET /api/admin/orders/{id}/workflow",
        )
        self.interrupt()


class CatalogueJourney(SequentialTaskSet):
    """Create a product -> Restock it -> Confirm it shows on the storefront."""

    def on_start(self):
        self.state = BackOfficeState()
        self.product = None
        if not staff_login(self.client, self.state):
            self.interrupt()

    @task
    def create_product(self):
        with self.client.post(
            "/api/admin/products",
            json=product_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/admin/products",
        ) as resp:
            if resp.status_code == 201:
                self.product = resp.json()["product"]
            else:
                resp.failure(f"Create product failed: {resp.status_code}")
                self.interrupt()

    @task
    def restock(self):
        self.client.put(
            f"/api/admin/products/{self.product['product_id']}",
            json={"stock_qty": self.product["stock_qty"] + random.randint(5, 20)},
            headers=self.state.headers,
            name="PUT /api/admin/products/{id}",
        )

    @task
    def view_on_storefront(self):
        self.client.get(f"/api/products/{self.product['slug']}", name="GET /api/products/{slug}")
        self.interrupt()


class BackOfficeUser(HttpUser):
    """Staff traffic: dashboards dominate, with steady packing and occasional catalogue edits."""

    wait_time = between(2, 6)
    tasks = {DashboardJourney: 6, PackingJourney: 3, CatalogueJourney: 1}
