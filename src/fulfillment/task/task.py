"""Back-office task assigned to a worker for one order.

State Machine:
    PENDING → IN_PROGRESS → COMPLETED
    {PENDING, IN_PROGRESS} → CANCELLED
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.database import Base, isoformat, new_id, utc_now


class TaskType(Enum):
    PACKING = "packing"
    QUALITY_CHECK = "quality_check"
    SHIPPING_PREP = "shipping_prep"
    OTHER = "other"


class TaskStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    order_id: Mapped[str] = mapped_column(String(36), index=True)
    order_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    type: Mapped[str] = mapped_column(String(20))
    status: Mapped[str] = mapped_column(String(20), default=TaskStatus.PENDING.value)
    priority: Mapped[str] = mapped_column(String(10), default=TaskPriority.MEDIUM.value)
    assigned_to: Mapped[str] = mapped_column(String(100), index=True)
    assigned_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    @classmethod
    def open(
        cls,
        order_id: str,
        order_number: str | None,
        task_type: str,
        assigned_to: str,
        assigned_by: str | None = None,
        priority: str | None = None,
        notes: str | None = None,
    ) -> "Task":
        return cls(
            order_id=order_id,
            order_number=order_number,
            type=task_type,
            status=TaskStatus.PENDING.value,
            priority=priority or TaskPriority.MEDIUM.value,
            assigned_to=assigned_to,
            assigned_by=assigned_by,
            notes=notes,
        )

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED.value

    def change_status(self, new_status: str) -> bool:
        """Apply a status change. Returns True when this change completed the task."""
        just_completed = new_status == TaskStatus.COMPLETED.value and not self.is_completed
        self.status = new_status
        if just_completed:
            self.completed_at = utc_now()
        return just_completed

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "order_id": self.order_id,
            "order_number": self.order_number,
            "type": self.type,
            "status": self.status,
            "priority": self.priority,
            "assigned_to": self.assigned_to,
            "assigned_by": self.assigned_by,
            "notes": self.notes,
            "completed_at": isoformat(self.completed_at),
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
