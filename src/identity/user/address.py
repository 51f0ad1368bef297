"""Saved shipping addresses. A user has at most one default address."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, select, update
from sqlalchemy.orm import Mapped, Session, mapped_column

from identity.domain import logger
from identity.shared.phone import normalize_phone
from shared.database import Base, get_or_raise, isoformat, new_id, utc_now
from shared.exceptions import PermissionDenied, ValidationError


class Address(Base):
    __tablename__ = "addresses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    name: Mapped[str] = mapped_column(String(200))
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    address_line1: Mapped[str] = mapped_column(String(255))
    address_line2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(100))
    state: Mapped[str] = mapped_column(String(100))
    pincode: Mapped[str] = mapped_column(String(20))
    country: Mapped[str] = mapped_column(String(100), default="India")
    is_default: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "phone": self.phone,
            "address_line1": self.address_line1,
            "address_line2": self.address_line2,
            "city": self.city,
            "state": self.state,
            "pincode": self.pincode,
            "country": self.country,
            "is_default": bool(self.is_default),
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }


def list_addresses(session: Session, user_id: str) -> list[Address]:
    query = (
        select(Address)
        .where(Address.user_id == user_id)
        .order_by(Address.is_default.desc(), Address.created_at.desc())
    )
    return list(session.scalars(query).all())


def _clear_default(session: Session, user_id: str, keep_id: str | None = None) -> None:
    statement = update(Address).where(Address.user_id == user_id, Address.is_default.is_(True))
    if keep_id:
        statement = statement.where(Address.id != keep_id)
    session.execute(statement.values(is_default=False))


def _own_address(session: Session, user_id: str, address_id: str) -> Address:
    address = get_or_raise(session, Address, address_id)
    if address.user_id != user_id:
        raise PermissionDenied("Unauthorized")
    return address


def add_address(session: Session, user_id: str, data: dict) -> Address:
    is_default = bool(data.get("is_default"))
    if is_default:
        _clear_default(session, user_id)
    address = Address(
        user_id=user_id,
        name=data["name"],
        phone=normalize_phone(data.get("phone")),
        address_line1=data["address_line1"],
        address_line2=data.get("address_line2") or None,
        city=data["city"],
        state=data["state"],
        pincode=data["pincode"],
        country=data["country"],
        is_default=is_default,
    )
    session.add(address)
    session.commit()
    logger.info("address_added", user_id=user_id, address_id=address.id, is_default=is_default)
    return address


def update_address(session: Session, user_id: str, address_id: str, changes: dict) -> Address:
    address = _own_address(session, user_id, address_id)
    values = dict(changes)
    if not values:
        raise ValidationError({"_entity": ["No updates provided"]})

    if values.get("is_default"):
        _clear_default(session, user_id, keep_id=address.id)
    if "phone" in values:
        values["phone"] = normalize_phone(values["phone"])
    for field, value in values.items():
        setattr(address, field, value)
    session.commit()
    logger.info("address_updated", user_id=user_id, address_id=address.id)
    return address


def delete_address(session: Session, user_id: str, address_id: str) -> None:
    address = _own_address(session, user_id, address_id)
    session.delete(address)
    session.commit()
    logger.info("address_deleted", user_id=user_id, address_id=address_id)
