"""Configurable fake payment gateway for development and testing.

No external calls are made. Orders get ``order_fake_...`` ids and the gateway
can be configured at runtime to refuse them. Signatures are verified exactly
like the real gateway does, so a test can sign a payment with
:func:`payments.gateway.port.compute_signature` and the same secret.
"""

from uuid import uuid4

from payments.gateway.port import GatewayOrderResult, PaymentGateway, signature_matches


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, key_id: str = "rzp_test_fake", key_secret: str = "fake_secret") -> None:
        self.key_id = key_id
        self.key_secret = key_secret
        self.should_succeed: bool = True
        self.failure_reason: str = "Order creation refused"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Order creation refused") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_order(self, amount: int, currency: str, receipt: str, notes: dict) -> GatewayOrderResult:
        self.calls.append(
            {
                "method": "create_order",
                "amount": amount,
                "currency": currency,
                "receipt": receipt,
                "notes": dict(notes),
            }
        )

        if self.should_succeed:
            return GatewayOrderResult(
                success=True,
                gateway_order_id=f"order_fake_{uuid4().hex[:14]}",
                amount=amount,
                currency=currency,
                receipt=receipt,
                gateway_status="created",
            )
        return GatewayOrderResult(
            success=False,
            gateway_status="failed",
            failure_reason=self.failure_reason,
        )

    def verify_payment_signature(self, gateway_order_id: str, payment_id: str, signature: str | None) -> bool:
        self.calls.append(
            {
                "method": "verify_payment_signature",
                "gateway_order_id": gateway_order_id,
                "payment_id": payment_id,
            }
        )
        return signature_matches(self.key_secret, gateway_order_id, payment_id, signature)
