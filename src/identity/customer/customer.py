"""Customer directory: one record per email that has ever ordered or registered."""

from datetime import datetime

from sqlalchemy import DateTime, String, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from identity.domain import logger
from shared.database import Base, isoformat, new_id, utc_now


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    user_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "phone": self.phone,
            "user_id": self.user_id,
            "created_at": isoformat(self.created_at),
        }


def upsert_customer(
    session: Session,
    *,
    email: str,
    name: str | None = None,
    phone: str | None = None,
    user_id: str | None = None,
) -> Customer:
    """Create or refresh the directory entry for ``email``; blank values never overwrite."""
    email = email.strip().lower()
    customer = session.scalar(select(Customer).where(Customer.email == email))
    if customer is None:
        customer = Customer(email=email, name=name, phone=phone, user_id=user_id)
        session.add(customer)
    else:
        customer.name = name or customer.name
        customer.phone = phone or customer.phone
        customer.user_id = user_id or customer.user_id
    session.commit()
    logger.debug("customer_upserted", customer_id=customer.id)
    return customer
