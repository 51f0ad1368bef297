"""Task assignment, progress updates and workflow auto-advance."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from fulfillment.domain import logger
from fulfillment.task.task import Task, TaskType
from fulfillment.task.workflow import (
    all_steps_completed,
    get_current_step,
    get_next_step,
    get_step_by_type,
    get_workflow_progress,
)
from ordering.order.order import Order, OrderStatus
from ordering.order.queries import get_order_for_staff
from shared.auth import Principal
from shared.cache import caches
from shared.database import get_or_raise
from shared.exceptions import PermissionDenied

_PACKABLE_STATUSES = {
    OrderStatus.CONFIRMED.value,
    OrderStatus.PROCESSING.value,
    OrderStatus.PACKING.value,
}


def tasks_for_order(session: Session, order_id: str) -> list[Task]:
    return list(session.scalars(select(Task).where(Task.order_id == order_id).order_by(Task.created_at)).all())


def list_tasks(
    session: Session,
    staff: Principal,
    order_id: str | None = None,
    assigned_to: str | None = None,
    status: str | None = None,
) -> list[Task]:
    query = select(Task).order_by(Task.created_at.desc())
    if staff.is_worker:
        assigned_to = staff.subject
    if order_id:
        query = query.where(Task.order_id == order_id)
    if assigned_to:
        query = query.where(Task.assigned_to == assigned_to)
    if status:
        query = query.where(Task.status == status)
    return list(session.scalars(query).all())


def get_task(session: Session, task_id: str, staff: Principal) -> Task:
    task = get_or_raise(session, Task, task_id)
    if staff.is_worker and task.assigned_to != staff.subject:
        raise PermissionDenied("You can only view your own tasks")
    return task


def create_task(session: Session, data: dict, assigned_by: str) -> Task:
    order = get_or_raise(session, Order, data["order_id"])
    task = Task.open(
        order_id=order.id,
        order_number=order.order_number,
        task_type=data["type"],
        assigned_to=data["assigned_to"],
        assigned_by=assigned_by,
        priority=data.get("priority"),
        notes=data.get("notes"),
    )
    session.add(task)
    session.commit()

    caches.invalidate("stats")
    logger.info(
        "task_created",
        task_id=task.id,
        order_id=task.order_id,
        type=task.type,
        assigned_to=task.assigned_to,
        assigned_by=assigned_by,
    )
    return task


def update_task(session: Session, task_id: str, changes: dict, staff: Principal) -> Task:
    task = get_or_raise(session, Task, task_id)

    if staff.is_worker and task.assigned_to != staff.subject:
        raise PermissionDenied("You can only update your own tasks")
    if "assigned_to" in changes and changes["assigned_to"] != task.assigned_to and not staff.is_superuser:
        raise PermissionDenied("Only superusers can reassign tasks")

    changes = dict(changes)
    just_completed = "status" in changes and task.change_status(changes.pop("status"))
    for field, value in changes.items():
        setattr(task, field, value)
    session.commit()

    caches.invalidate("stats")
    logger.info("task_updated", task_id=task.id, status=task.status, updated_by=staff.subject)

    if just_completed:
        advance_workflow(session, task, staff)
    return task


def advance_workflow(session: Session, task: Task, staff: Principal) -> None:
    """Queue the next step and move the order along; failures are logged, not raised."""
    try:
        _queue_next_step(session, task, staff)
        _advance_order(session, task)
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("workflow_advance_failed", task_id=task.id, order_id=task.order_id)
        return
    caches.invalidate("stats")


def _queue_next_step(session: Session, task: Task, staff: Principal) -> None:
    if get_step_by_type(task.type) is None:
        return
    next_step = get_next_step(task.type)
    if next_step is None:
        return
    if any(existing.type == next_step.type for existing in tasks_for_order(session, task.order_id)):
        return
    if session.get(Order, task.order_id) is None:
        return

    follow_up = Task.open(
        order_id=task.order_id,
        order_number=task.order_number,
        task_type=next_step.type,
        assigned_to=task.assigned_to,
        assigned_by=staff.subject or task.assigned_by,
        priority=task.priority,
    )
    session.add(follow_up)
    session.flush()
    logger.info("workflow_task_queued", task_id=follow_up.id, order_id=task.order_id, type=next_step.type)


def _advance_order(session: Session, task: Task) -> None:
    order = session.get(Order, task.order_id)
    if order is None:
        return

    previous = order.status
    if all_steps_completed(tasks_for_order(session, task.order_id)):
        if order.status in _PACKABLE_STATUSES:
            order.status = OrderStatus.PACKED.value
    elif task.type == TaskType.PACKING.value and order.status == OrderStatus.CONFIRMED.value:
        order.status = OrderStatus.PROCESSING.value
    elif task.type == TaskType.QUALITY_CHECK.value and order.status == OrderStatus.PROCESSING.value:
        order.status = OrderStatus.PACKING.value

    if order.status != previous:
        logger.info("order_advanced_by_workflow", order_id=order.id, from_status=previous, to_status=order.status)


def delete_task(session: Session, task_id: str) -> None:
    task = get_or_raise(session, Task, task_id)
    session.delete(task)
    session.commit()
    caches.invalidate("stats")
    logger.info("task_deleted", task_id=task_id)


def order_workflow(session: Session, identifier: str, staff: Principal) -> dict:
    order = get_order_for_staff(session, identifier, staff)
    tasks = tasks_for_order(session, order.id)
    current = get_current_step(tasks)
    return {
        "order_id": order.id,
        "order_number": order.order_number,
        "order_status": order.status,
        "progress": get_workflow_progress(tasks),
        "current_step": current.to_dict() if current else None,
        "tasks": [task.to_dict() for task in tasks],
    }
