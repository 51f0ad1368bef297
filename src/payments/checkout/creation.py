"""Opening a gateway order for an online checkout."""

import secrets
import time

from payments.domain import logger
from payments.gateway import get_gateway
from shared.exceptions import PaymentGatewayError, ValidationError

MINIMUM_AMOUNT = 100  # paise
DEFAULT_CURRENCY = "INR"


def new_receipt() -> str:
    return f"receipt_{int(time.time() * 1000)}_{secrets.token_hex(3)}"


def create_gateway_order(
    amount,
    customer: dict | None,
    currency: str | None = None,
    notes: dict | None = None,
) -> dict:
    try:
        amount = int(amount or 0)
    except (TypeError, ValueError):
        amount = 0
    if amount < MINIMUM_AMOUNT:
        raise ValidationError({"amount": ["Invalid amount. Minimum order value is ₹1"]})
    customer = customer or {}
    if not customer.get("name") or not customer.get("email"):
        raise ValidationError({"customer": ["Customer name and email are required"]})

    gateway = get_gateway()
    order_notes = {key: str(value) for key, value in (notes or {}).items()}
    order_notes.update(
        customer_name=customer["name"],
        customer_email=customer["email"],
        customer_phone=customer.get("phone") or "",
    )
    currency = currency or DEFAULT_CURRENCY
    receipt = new_receipt()

    result = gateway.create_order(amount, currency, receipt, order_notes)
    if not result.success:
        logger.warning("gateway_order_failed", receipt=receipt, reason=result.failure_reason)
        raise PaymentGatewayError(result.failure_reason or "Failed to create order")

    logger.info("gateway_order_created", gateway_order_id=result.gateway_order_id, amount=amount, receipt=receipt)
    return {
        "order_id": result.gateway_order_id,
        "amount": result.amount,
        "currency": result.currency,
        "receipt": result.receipt,
        "key_id": gateway.key_id,
    }
