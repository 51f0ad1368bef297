"""Contact-form messages and their back-office inbox."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from shared.database import Base, get_or_raise, isoformat, new_id, utc_now
from shared.exceptions import ValidationError
from support.domain import logger


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    message: Mapped[str] = mapped_column(Text)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, index=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "message": self.message,
            "is_read": bool(self.is_read),
            "created_at": isoformat(self.created_at),
        }


def create_message(
    session: Session,
    *,
    name: str | None,
    email: str | None,
    message: str | None,
    phone: str | None = None,
) -> ContactMessage:
    name = (name or "").strip()
    email = (email or "").strip()
    message = (message or "").strip()
    if not name or not email or not message:
        raise ValidationError({"_entity": ["Name, email and message are required"]})

    contact = ContactMessage(name=name, email=email, phone=(phone or "").strip() or None, message=message)
    session.add(contact)
    session.commit()
    logger.info("contact_message_received", message_id=contact.id)
    return contact


def list_messages(session: Session, unread_only: bool = False) -> list[ContactMessage]:
    query = select(ContactMessage).order_by(ContactMessage.created_at.desc())
    if unread_only:
        query = query.where(ContactMessage.is_read.is_(False))
    return list(session.scalars(query).all())


def mark_read(session: Session, message_id: str, is_read: bool = True) -> ContactMessage:
    contact = get_or_raise(session, ContactMessage, message_id, "Message")
    contact.is_read = bool(is_read)
    session.commit()
    logger.info("contact_message_marked", message_id=message_id, is_read=contact.is_read)
    return contact


def delete_message(session: Session, message_id: str) -> None:
    contact = get_or_raise(session, ContactMessage, message_id, "Message")
    session.delete(contact)
    session.commit()
    logger.info("contact_message_deleted", message_id=message_id)
