"""Order lookups for the storefront and the back-office."""

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from fulfillment.task.task import Task
from ordering.order.order import Order
from shared.auth import Principal
from shared.exceptions import ObjectNotFoundError, PermissionDenied, ValidationError


def find_order(session: Session, identifier: str) -> Order:
    """Resolve an order by id, falling back to its order number."""
    order = session.get(Order, identifier) if identifier else None
    if order is None and identifier:
        order = session.scalar(select(Order).where(Order.order_number == identifier))
    if order is None:
        raise ObjectNotFoundError({"order": ["Order not found"]})
    return order


def list_user_orders(session: Session, user_id: str | None) -> list[Order]:
    if not user_id:
        raise ValidationError({"user_id": ["User ID is required"]})
    query = select(Order).where(Order.user_id == user_id).order_by(Order.created_at.desc())
    return list(session.scalars(query).all())


def list_orders(session: Session, statuses: list[str] | None = None, assigned_to: str | None = None) -> list[Order]:
    query = select(Order).order_by(Order.created_at.desc())
    if statuses:
        query = query.where(Order.status.in_(statuses))
    if assigned_to:
        query = query.where(Order.assigned_to == assigned_to)
    return list(session.scalars(query).all())


def list_orders_for_staff(
    session: Session,
    staff: Principal,
    statuses: list[str] | None = None,
    assigned_to: str | None = None,
) -> list[Order]:
    """Workers only ever see orders assigned to them or carrying one of their tasks."""
    if not staff.is_worker:
        return list_orders(session, statuses=statuses, assigned_to=assigned_to)

    task_order_ids = select(Task.order_id).where(Task.assigned_to == staff.subject)
    query = (
        select(Order)
        .where(or_(Order.assigned_to == staff.subject, Order.id.in_(task_order_ids)))
        .order_by(Order.created_at.desc())
    )
    if statuses:
        query = query.where(Order.status.in_(statuses))
    return list(session.scalars(query).all())


def worker_has_access(session: Session, order: Order, username: str) -> bool:
    if order.assigned_to == username:
        return True
    task_id = session.scalar(
        select(Task.id).where(Task.order_id == order.id, Task.assigned_to == username).limit(1)
    )
    return task_id is not None


def get_order_for_staff(session: Session, identifier: str, staff: Principal) -> Order:
    order = find_order(session, identifier)
    if staff.is_worker and not worker_has_access(session, order, staff.subject):
        raise PermissionDenied("You don't have access to this order")
    return order
