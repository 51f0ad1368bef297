"""Verifying a gateway payment confirmation and finalizing the order.

The signature is checked before anything else in the request is looked at.
Once it holds, the order is persisted as confirmed and paid, then the
best-effort follow-up writes run (offer usage, stock, customer directory).
"""

from sqlalchemy.orm import Session

from ordering.order.creation import apply_post_order_effects, create_order
from ordering.order.draft import GatewayOrderDraft
from ordering.order.order import Order, OrderStatus, PaymentStatus
from payments.domain import logger
from payments.gateway import get_gateway
from shared.exceptions import ValidationError

VERIFIED_MESSAGE = "Payment verified and order created successfully"


def verify_payment(
    session: Session,
    *,
    razorpay_order_id: str | None,
    razorpay_payment_id: str | None,
    razorpay_signature: str | None,
    order_data: dict | None,
) -> Order:
    gateway = get_gateway()
    if not gateway.verify_payment_signature(razorpay_order_id, razorpay_payment_id, razorpay_signature):
        logger.warning(
            "payment_signature_rejected",
            razorpay_order_id=razorpay_order_id,
            razorpay_payment_id=razorpay_payment_id,
        )
        raise ValidationError({"razorpay_signature": ["Payment verification failed: Invalid signature"]})

    if not order_data:
        raise ValidationError({"orderData": ["Order data is required"]})

    draft = GatewayOrderDraft.model_validate(order_data)
    order = create_order(
        session,
        **draft.order_fields(),
        payment_status=PaymentStatus.PAID.value,
        status=OrderStatus.CONFIRMED.value,
        razorpay_order_id=razorpay_order_id,
        razorpay_payment_id=razorpay_payment_id,
    )
    logger.info("payment_verified", order_id=order.id, razorpay_payment_id=razorpay_payment_id)

    apply_post_order_effects(session, order)
    return order
