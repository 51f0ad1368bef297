"""Pydantic request schemas for the back-office task API."""

from pydantic import BaseModel, Field

from fulfillment.task.task import TaskPriority, TaskStatus, TaskType
from shared.api import RequiredStr


class CreateTaskRequest(BaseModel):
    order_id: RequiredStr
    assigned_to: RequiredStr = Field(..., max_length=100)
    type: TaskType
    priority: TaskPriority = TaskPriority.MEDIUM.value
    notes: str | None = None

    model_config = {
        "use_enum_values": True,
        "json_schema_extra": {
            "examples": [
                {
                    "order_id": "5b7e1f0c-3f4a-4e8e-9d0a-1f2b3c4d5e6f",
                    "assigned_to": "meera",
                    "type": "packing",
                    "priority": "high",
                }
            ]
        },
    }


class UpdateTaskRequest(BaseModel):
    status: TaskStatus = None
    priority: TaskPriority = None
    assigned_to: RequiredStr = Field(None, max_length=100)
    notes: str | None = None

    model_config = {
        "use_enum_values": True,
        "json_schema_extra": {"examples": [{"status": "completed", "notes": "Packed in gift box"}]},
    }
