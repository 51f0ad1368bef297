"""Payment gateway port (abstract interface).

Defines the contract every gateway adapter implements so the checkout flow can
run against RazorpayGateway in production and FakeGateway in development and
tests without changing any application code.
"""

import hashlib
import hmac
from abc import ABC, abstractmethod
from dataclasses import dataclass, field


def compute_signature(secret: str, gateway_order_id: str, payment_id: str) -> str:
    """Lowercase hex HMAC-SHA256 of ``"{order_id}|{payment_id}"`` keyed by the gateway secret."""
    message = f"{gateway_order_id}|{payment_id}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


def signature_matches(secret: str, gateway_order_id: str, payment_id: str, signature: str | None) -> bool:
    if not signature or not gateway_order_id or not payment_id:
        return False
    expected = compute_signature(secret, gateway_order_id, payment_id)
    return hmac.compare_digest(expected, signature)


@dataclass(frozen=True)
class GatewayOrderResult:
    """Result of asking the gateway to open an order for a checkout."""

    success: bool
    gateway_order_id: str | None = None
    amount: int | None = None
    currency: str | None = None
    receipt: str | None = None
    gateway_status: str | None = None
    failure_reason: str | None = None
    raw: dict = field(default_factory=dict)


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    key_id: str

    @abstractmethod
    def create_order(self, amount: int, currency: str, receipt: str, notes: dict) -> GatewayOrderResult:
        """Open a gateway order for ``amount`` in the currency's smallest unit."""
        ...

    @abstractmethod
    def verify_payment_signature(self, gateway_order_id: str, payment_id: str, signature: str | None) -> bool:
        """Verify that a payment confirmation is authentically from the gateway."""
        ...
