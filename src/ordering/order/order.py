"""Order model and its status rules.

Status flow (back-office driven, no enforced transition table):
    PENDING → CONFIRMED → PROCESSING → PACKING → PACKED → SHIPPED → DELIVERED
    {PENDING, CONFIRMED, PROCESSING, PACKING} → CANCELLED   (customer cancel)

Refunds are a manual two-step workflow tracked separately from payment status:
cancelling a paid online order starts a refund (``refund_status = started``)
and leaves ``payment_status = paid``; an admin later marks the refund
``completed``, which flips ``payment_status`` to ``refunded``.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.database import Base, isoformat, new_id, utc_now
from shared.exceptions import ValidationError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    PACKING = "packing"
    PACKED = "packed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(Enum):
    RAZORPAY = "razorpay"
    COD = "cod"
    UPI = "upi"


class RefundStatus(Enum):
    STARTED = "started"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


CANCELLABLE_STATUSES = {
    OrderStatus.PENDING.value,
    OrderStatus.CONFIRMED.value,
    OrderStatus.PROCESSING.value,
    OrderStatus.PACKING.value,
}


def order_number_for(moment: datetime) -> str:
    """``ORD-{year}-{last six digits of the epoch milliseconds}``."""
    millis = int(moment.timestamp() * 1000)
    return f"ORD-{moment.year}-{str(millis)[-6:]}"


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------
class Order(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    order_number: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    items: Mapped[list] = mapped_column(JSON, default=list)
    subtotal: Mapped[float] = mapped_column(Float, default=0.0)
    shipping: Mapped[float] = mapped_column(Float, default=0.0)
    discount: Mapped[float] = mapped_column(Float, default=0.0)
    total: Mapped[float] = mapped_column(Float, default=0.0)
    offer_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    customer: Mapped[dict] = mapped_column(JSON, default=dict)
    shipping_address: Mapped[dict] = mapped_column(JSON, default=dict)
    payment_method: Mapped[str] = mapped_column(String(20), default=PaymentMethod.COD.value)
    payment_status: Mapped[str] = mapped_column(String(20), default=PaymentStatus.PENDING.value)
    status: Mapped[str] = mapped_column(String(20), default=OrderStatus.PENDING.value, index=True)
    refund_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    razorpay_order_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    razorpay_payment_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    razorpay_refund_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    refund_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    tracking_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    courier_company: Mapped[str | None] = mapped_column(String(100), nullable=True)
    assigned_to: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    # -----------------------------------------------------------------------
    # Business rules
    # -----------------------------------------------------------------------
    @property
    def is_cod(self) -> bool:
        return self.payment_method == PaymentMethod.COD.value

    @property
    def is_cancellable(self) -> bool:
        return self.status in CANCELLABLE_STATUSES

    @property
    def can_refund(self) -> bool:
        return (
            self.status == OrderStatus.CANCELLED.value
            and not self.is_cod
            and self.payment_status == PaymentStatus.PAID.value
        )

    def _start_refund_if_paid_online(self) -> bool:
        if self.payment_status == PaymentStatus.PAID.value and not self.is_cod:
            self.refund_status = RefundStatus.STARTED.value
            return True
        return False

    def cancel(self) -> bool:
        """Cancel on the customer's behalf. Returns True when a refund was started."""
        if not self.is_cancellable:
            raise ValidationError({"status": [f"Order cannot be cancelled. Current status: {self.status}"]})
        refund_started = self._start_refund_if_paid_online()
        self.status = OrderStatus.CANCELLED.value
        return refund_started

    def change_status(self, new_status: str) -> None:
        """Back-office status change; cancelling here also starts a refund when owed."""
        if new_status == OrderStatus.CANCELLED.value and self.status != OrderStatus.CANCELLED.value:
            self._start_refund_if_paid_online()
        self.status = new_status

    def update_refund(self, refund_status: str, refund_id: str | None = None, notes: str | None = None) -> None:
        if self.status != OrderStatus.CANCELLED.value:
            raise ValidationError({"status": ["Refund can only be managed for cancelled orders"]})
        if self.is_cod:
            raise ValidationError({"payment_method": ["Refund is not applicable for Cash on Delivery orders"]})
        if self.payment_status not in (PaymentStatus.PAID.value, PaymentStatus.REFUNDED.value):
            raise ValidationError({"payment_status": ["Order must have been paid to process refund"]})

        self.refund_status = refund_status
        if refund_status == RefundStatus.COMPLETED.value:
            self.payment_status = PaymentStatus.REFUNDED.value
        if refund_id:
            self.razorpay_refund_id = refund_id
        if notes:
            self.refund_notes = notes

    def contains_product(self, product_id: str) -> bool:
        return any(item.get("product_id") == product_id for item in self.items or [])

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "order_number": self.order_number,
            "items": list(self.items or []),
            "subtotal": self.subtotal,
            "shipping": self.shipping,
            "discount": self.discount,
            "total": self.total,
            "offer_id": self.offer_id,
            "customer": dict(self.customer or {}),
            "shipping_address": dict(self.shipping_address or {}),
            "payment_method": self.payment_method,
            "payment_status": self.payment_status,
            "status": self.status,
            "refund_status": self.refund_status,
            "razorpay_order_id": self.razorpay_order_id,
            "razorpay_payment_id": self.razorpay_payment_id,
            "razorpay_refund_id": self.razorpay_refund_id,
            "refund_notes": self.refund_notes,
            "tracking_number": self.tracking_number,
            "courier_company": self.courier_company,
            "assigned_to": self.assigned_to,
            "notes": self.notes,
            "user_id": self.user_id,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
