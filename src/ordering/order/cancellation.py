"""Customer-initiated order cancellation."""

from sqlalchemy.orm import Session

from ordering.domain import logger
from ordering.order.order import Order
from shared.auth import Principal
from shared.cache import caches
from shared.database import get_or_raise
from shared.exceptions import PermissionDenied, ValidationError

REFUND_STARTED_MESSAGE = "Order cancelled. Refund process has been initiated."
CANCELLED_MESSAGE = "Order cancelled successfully."


def cancel_order(session: Session, order_id: str, customer: Principal, action: str = "cancel") -> tuple[Order, str]:
    """Cancel one of the customer's own orders.

    Returns the updated order and the message to show the customer.
    """
    order = get_or_raise(session, Order, order_id)
    if order.user_id != customer.subject:
        raise PermissionDenied("You can only cancel your own orders")
    if action != "cancel":
        raise ValidationError({"action": ["Invalid action"]})

    refund_started = order.cancel()
    session.commit()

    caches.invalidate("stats")
    logger.info(
        "order_cancelled",
        order_id=order.id,
        order_number=order.order_number,
        refund_started=refund_started,
        cancelled_by="customer",
    )
    return order, REFUND_STARTED_MESSAGE if refund_started else CANCELLED_MESSAGE
