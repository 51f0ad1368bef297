"""Manual refund tracking for cancelled, paid online orders."""

from sqlalchemy.orm import Session

from ordering.domain import logger
from ordering.order.order import Order
from ordering.order.queries import find_order
from shared.cache import caches
from shared.exceptions import ValidationError


def update_refund_status(
    session: Session,
    order_id: str,
    refund_status: str | None,
    refund_id: str | None = None,
    notes: str | None = None,
) -> Order:
    if not refund_status:
        raise ValidationError({"refund_status": ["refund_status is required"]})

    order = find_order(session, order_id)
    order.update_refund(refund_status, refund_id=refund_id, notes=notes)
    session.commit()

    caches.invalidate("stats")
    logger.info(
        "refund_status_updated",
        order_id=order.id,
        refund_status=order.refund_status,
        payment_status=order.payment_status,
    )
    return order


def refund_details(session: Session, order_id: str) -> dict:
    order = find_order(session, order_id)
    return {
        "refund_status": order.refund_status,
        "refund_id": order.razorpay_refund_id,
        "refund_notes": order.refund_notes,
        "payment_method": order.payment_method,
        "payment_status": order.payment_status,
        "razorpay_payment_id": order.razorpay_payment_id,
        "razorpay_order_id": order.razorpay_order_id,
        "total": order.total,
        "can_refund": order.can_refund,
    }
