"""Razorpay payment gateway adapter.

Talks to the Razorpay Orders REST API over httpx with HTTP basic auth
(key id / key secret). Payment confirmations are verified locally with the
key secret; no API call is needed for that.
"""

import httpx
import structlog

from payments.gateway.port import GatewayOrderResult, PaymentGateway, signature_matches

logger = structlog.get_logger(__name__)

RAZORPAY_API_URL = "https://api.razorpay.com/v1"


class RazorpayGateway(PaymentGateway):
    """Production Razorpay gateway adapter."""

    def __init__(self, key_id: str, key_secret: str, timeout: float = 10.0, transport=None) -> None:
        self.key_id = key_id
        self.key_secret = key_secret
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=RAZORPAY_API_URL,
            auth=(self.key_id, self.key_secret),
            timeout=self.timeout,
            transport=self._transport,
        )

    def create_order(self, amount: int, currency: str, receipt: str, notes: dict) -> GatewayOrderResult:
        payload = {"amount": amount, "currency": currency, "receipt": receipt, "notes": notes}
        try:
            with self._client() as client:
                response = client.post("/orders", json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            reason = _error_description(exc.response) or "Failed to create order"
            logger.error(
                "razorpay_order_failed",
                status_code=exc.response.status_code,
                reason=reason,
                receipt=receipt,
            )
            return GatewayOrderResult(success=False, gateway_status="failed", failure_reason=reason)
        except httpx.HTTPError as exc:
            logger.error("razorpay_unreachable", error=str(exc), receipt=receipt)
            return GatewayOrderResult(success=False, gateway_status="error", failure_reason="Payment gateway unavailable")

        body = response.json()
        return GatewayOrderResult(
            success=True,
            gateway_order_id=body.get("id"),
            amount=body.get("amount", amount),
            currency=body.get("currency", currency),
            receipt=body.get("receipt", receipt),
            gateway_status=body.get("status"),
            raw=body,
        )

    def verify_payment_signature(self, gateway_order_id: str, payment_id: str, signature: str | None) -> bool:
        return signature_matches(self.key_secret, gateway_order_id, payment_id, signature)


def _error_description(response: httpx.Response) -> str | None:
    try:
        return response.json().get("error", {}).get("description")
    except ValueError:
        return None
