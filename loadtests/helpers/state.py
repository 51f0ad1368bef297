"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state; nothing is shared across
users. State holds the ids and tokens returned by earlier steps so follow-up
requests can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """A simulated storefront customer."""

    email: str | None = None
    password: str | None = None
    name: str | None = None
    phone: str | None = None
    token: str | None = None
    order_id: str | None = None
    products: list[dict] = field(default_factory=list)

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    @property
    def customer(self) -> dict:
        return {"name": self.name, "email": self.email, "phone": self.phone}


@dataclass
class BackOfficeState:
    """A signed-in staff member working the order queue."""

    token: str | None = None
    order_ids: list[str] = field(default_factory=list)
    task_ids: list[str] = field(default_factory=list)

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}
