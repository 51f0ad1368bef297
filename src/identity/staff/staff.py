"""Back-office staff accounts.

Roles:
    superadmin  - full access, including staff, offers, refunds and deletions
    admin       - catalogue, reviews, customers, settings and messages
    worker      - orders and tasks assigned to them
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from shared.auth import Role
from shared.database import Base, isoformat, utc_now


class Staff(Base):
    __tablename__ = "staff"

    username: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str] = mapped_column(String(255), default="")
    role: Mapped[str] = mapped_column(String(20), default=Role.WORKER.value)
    password_hash: Mapped[str] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    @property
    def role_enum(self) -> Role:
        return Role(self.role)

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "created_at": isoformat(self.created_at),
        }
