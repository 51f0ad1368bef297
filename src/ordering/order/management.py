"""Back-office order edits: status, payment, shipping details and assignment."""

from sqlalchemy.orm import Session

from ordering.domain import logger
from ordering.order.order import Order
from ordering.order.queries import get_order_for_staff
from shared.auth import Principal
from shared.cache import caches
from shared.exceptions import PermissionDenied, ValidationError


def update_order(session: Session, identifier: str, changes: dict, staff: Principal) -> Order:
    """Apply validated ``changes``; workers change status only on orders assigned to them."""
    if not changes:
        raise ValidationError({"_entity": ["No updates provided"]})

    order = get_order_for_staff(session, identifier, staff)

    if staff.is_worker:
        if "assigned_to" in changes:
            raise PermissionDenied("Workers cannot assign orders")
        if "status" in changes and order.assigned_to != staff.subject:
            raise PermissionDenied("You can only update orders assigned to you")

    fields = sorted(changes)
    changes = dict(changes)
    if "status" in changes:
        order.change_status(changes.pop("status"))
    for field, value in changes.items():
        setattr(order, field, value)

    session.commit()

    caches.invalidate("stats")
    logger.info(
        "order_updated",
        order_id=order.id,
        order_number=order.order_number,
        fields=fields,
        updated_by=staff.subject,
    )
    return order
