"""The packing workflow every order goes through before it ships."""

from collections.abc import Iterable
from dataclasses import dataclass

from fulfillment.task.task import TaskStatus, TaskType


@dataclass(frozen=True)
class WorkflowStep:
    type: str
    name: str
    description: str
    order: int
    required: bool = True

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "name": self.name,
            "description": self.description,
            "order": self.order,
            "required": self.required,
        }


WORKFLOW_STEPS = (
    WorkflowStep(TaskType.PACKING.value, "Packing", "Pack the order items", 1),
    WorkflowStep(TaskType.QUALITY_CHECK.value, "Quality Check", "Verify order quality and contents", 2),
    WorkflowStep(TaskType.SHIPPING_PREP.value, "Shipping Preparation", "Prepare order for shipping", 3),
)


def get_step_by_type(step_type: str | None) -> WorkflowStep | None:
    return next((step for step in WORKFLOW_STEPS if step.type == step_type), None)


def get_next_step(current_type: str | None) -> WorkflowStep | None:
    """The step after ``current_type``; the first step when nothing has started."""
    if not current_type:
        return WORKFLOW_STEPS[0]
    current = get_step_by_type(current_type)
    if current is None:
        return None
    return next((step for step in WORKFLOW_STEPS if step.order == current.order + 1), None)


def is_step_completed(step_type: str, tasks: Iterable) -> bool:
    return any(task.type == step_type and task.status == TaskStatus.COMPLETED.value for task in tasks)


def get_workflow_progress(tasks: Iterable) -> int:
    tasks = list(tasks)
    completed = sum(1 for step in WORKFLOW_STEPS if is_step_completed(step.type, tasks))
    return round(completed / len(WORKFLOW_STEPS) * 100)


def get_current_step(tasks: Iterable) -> WorkflowStep | None:
    """First incomplete step, or None once the whole workflow is done."""
    tasks = list(tasks)
    return next((step for step in WORKFLOW_STEPS if not is_step_completed(step.type, tasks)), None)


def all_steps_completed(tasks: Iterable) -> bool:
    return get_current_step(tasks) is None
