"""Discount offers and the per-customer usage ledger."""

from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.database import Base, as_utc, isoformat, new_id, utc_now


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class Offer(Base):
    __tablename__ = "offers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    code: Mapped[str | None] = mapped_column(String(50), unique=True, nullable=True, index=True)
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text, default="")
    discount_type: Mapped[str] = mapped_column(String(20), default=DiscountType.PERCENTAGE.value)
    discount_value: Mapped[float] = mapped_column(Float, default=0.0)
    min_order_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_discount: Mapped[float | None] = mapped_column(Float, nullable=True)
    valid_from: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    valid_until: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    customer_emails: Mapped[list] = mapped_column(JSON, default=list)
    customer_ids: Mapped[list] = mapped_column(JSON, default=list)
    usage_limit: Mapped[int | None] = mapped_column(Integer, nullable=True)
    used_count: Mapped[int] = mapped_column(Integer, default=0)
    one_time_per_user: Mapped[bool] = mapped_column(Boolean, default=False)
    created_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    @property
    def is_restricted(self) -> bool:
        return bool(self.customer_emails or self.customer_ids)

    def is_within_window(self, moment: datetime) -> bool:
        return as_utc(self.valid_from) <= moment <= as_utc(self.valid_until)

    def is_exhausted(self) -> bool:
        return bool(self.usage_limit) and (self.used_count or 0) >= self.usage_limit

    def is_available_to(self, customer_email: str | None, customer_id: str | None) -> bool:
        if not self.is_restricted:
            return True
        if customer_email and customer_email.lower() in (self.customer_emails or []):
            return True
        return bool(customer_id) and customer_id in (self.customer_ids or [])

    def discount_for(self, subtotal: float) -> float:
        """Discount in rupees: a capped percentage, or a fixed amount never above the subtotal."""
        if self.discount_type == DiscountType.PERCENTAGE.value:
            discount = subtotal * self.discount_value / 100
            if self.max_discount and discount > self.max_discount:
                discount = self.max_discount
        else:
            discount = min(self.discount_value, subtotal)
        return round(discount, 2)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "code": self.code,
            "title": self.title,
            "description": self.description,
            "discount_type": self.discount_type,
            "discount_value": self.discount_value,
            "min_order_amount": self.min_order_amount,
            "max_discount": self.max_discount,
            "valid_from": isoformat(self.valid_from),
            "valid_until": isoformat(self.valid_until),
            "is_active": bool(self.is_active),
            "customer_emails": list(self.customer_emails or []),
            "customer_ids": list(self.customer_ids or []),
            "usage_limit": self.usage_limit,
            "used_count": self.used_count,
            "one_time_per_user": bool(self.one_time_per_user),
            "created_by": self.created_by,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }


class OfferUsage(Base):
    __tablename__ = "offer_usages"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    offer_id: Mapped[str] = mapped_column(String(36), index=True)
    customer_email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    customer_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    order_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    used_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
