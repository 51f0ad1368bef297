"""FastAPI routes for back-office tasks and the packing workflow."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fulfillment.api.schemas import CreateTaskRequest, UpdateTaskRequest
from fulfillment.task.management import create_task, delete_task, get_task, list_tasks, order_workflow, update_task
from shared.auth import Principal, require_staff, require_superuser
from shared.database import get_session

task_router = APIRouter(prefix="/api/admin/tasks", tags=["admin-tasks"])
workflow_router = APIRouter(prefix="/api/admin/orders", tags=["admin-orders"])


@task_router.get("")
async def get_tasks(
    order_id: str | None = None,
    assigned_to: str | None = None,
    status: str | None = None,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_staff),
):
    tasks = list_tasks(session, staff, order_id=order_id, assigned_to=assigned_to, status=status)
    return {"success": True, "tasks": [task.to_dict() for task in tasks]}


@task_router.post("", status_code=201)
async def add_task(
    body: CreateTaskRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_superuser),
):
    task = create_task(session, body.model_dump(), assigned_by=staff.subject)
    return {"success": True, "task": task.to_dict()}


@task_router.get("/{task_id}")
async def get_single_task(
    task_id: str,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_staff),
):
    return {"success": True, "task": get_task(session, task_id, staff).to_dict()}


@task_router.put("/{task_id}")
async def edit_task(
    task_id: str,
    body: UpdateTaskRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_staff),
):
    task = update_task(session, task_id, body.model_dump(exclude_unset=True), staff)
    return {"success": True, "task": task.to_dict()}


@task_router.delete("/{task_id}")
async def remove_task(
    task_id: str,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_superuser),
):
    delete_task(session, task_id)
    return {"success": True, "message": "Task deleted successfully"}


@workflow_router.get("/{order_id}/workflow")
async def get_order_workflow(
    order_id: str,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_staff),
):
    return {"success": True, "workflow": order_workflow(session, order_id, staff)}
