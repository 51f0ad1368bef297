"""Pydantic request schemas for the Ordering API."""

from datetime import UTC, datetime, time

from pydantic import BaseModel, Field, field_validator

from ordering.offer.offer import DiscountType
from ordering.order.draft import OrderDraft, StorefrontOrderDraft
from ordering.order.order import OrderStatus, PaymentStatus, RefundStatus
from shared.api import LowercaseStr, RequiredStr, TrimmedStr, UppercaseStr

# --- Order Request Schemas ---


class PlaceOrderRequest(StorefrontOrderDraft):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {
                            "product_id": "va-01",
                            "sku": "VA-EAR-001",
                            "title": "Kundan Jhumka",
                            "quantity": 1,
                            "price": 2499,
                        }
                    ],
                    "customer": {"name": "Asha Rao", "email": "asha@example.com", "phone": "9876543210"},
                    "shipping_address": {
                        "name": "Asha Rao",
                        "address_line1": "12 MG Road",
                        "city": "Bengaluru",
                        "state": "Karnataka",
                        "pincode": "560001",
                    },
                    "subtotal": 2499,
                    "shipping": 0,
                    "total": 2499,
                    "payment_method": "cod",
                }
            ]
        }
    }


class ManualOrderRequest(OrderDraft):
    pass


class UpdateOrderRequest(BaseModel):
    model_config = {
        "use_enum_values": True,
        "json_schema_extra": {
            "examples": [{"status": "shipped", "tracking_number": "EK123456789IN", "courier_company": "India Post"}]
        },
    }

    status: OrderStatus = None
    payment_status: PaymentStatus = None
    tracking_number: TrimmedStr | None = Field(None, max_length=100)
    courier_company: TrimmedStr | None = Field(None, max_length=100)
    assigned_to: TrimmedStr | None = Field(None, max_length=100)
    notes: str | None = None

    @field_validator("assigned_to")
    @classmethod
    def blank_assignee_is_unassigned(cls, value: str | None) -> str | None:
        return value or None


class CancelOrderRequest(BaseModel):
    action: str = "cancel"


class RefundUpdateRequest(BaseModel):
    refund_status: RefundStatus | None = None
    refund_id: str | None = None
    notes: str | None = None

    model_config = {
        "use_enum_values": True,
        "json_schema_extra": {
            "examples": [
                {
                    "refund_status": "completed",
                    "refund_id": "rfnd_NZ4a1k2Jd9",
                    "notes": "Refunded to original payment method",
                }
            ]
        },
    }


# --- Offer Request Schemas ---


def _offer_date(value, end_of_day: bool):
    """Accept an ISO datetime or a bare ``YYYY-MM-DD`` date (start or end of that day)."""
    if isinstance(value, str) and "T" not in value and len(value) == 10:
        day = datetime.fromisoformat(value).date()
        return datetime.combine(day, time(23, 59, 59) if end_of_day else time.min, tzinfo=UTC)
    return value


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class OfferFields(BaseModel):
    model_config = {"use_enum_values": True}

    code: UppercaseStr | None = Field(None, max_length=50)
    description: str = None
    discount_type: DiscountType = None
    discount_value: float = Field(None, ge=0)
    min_order_amount: float | None = Field(None, ge=0)
    max_discount: float | None = Field(None, ge=0)
    valid_from: datetime = None
    valid_until: datetime = None
    is_active: bool = None
    customer_emails: list[LowercaseStr] = None
    customer_ids: list[RequiredStr] = None
    customer_email: LowercaseStr | None = None
    customer_id: RequiredStr | None = None
    usage_limit: int | None = Field(None, ge=0)
    one_time_per_user: bool = None

    @field_validator("code")
    @classmethod
    def blank_code_is_none(cls, value: str | None) -> str | None:
        return value or None

    @field_validator("valid_from", mode="before")
    @classmethod
    def parse_valid_from(cls, value):
        return _offer_date(value, end_of_day=False)

    @field_validator("valid_until", mode="before")
    @classmethod
    def parse_valid_until(cls, value):
        return _offer_date(value, end_of_day=True)

    @field_validator("valid_from", "valid_until")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)

    def offer_changes(self) -> dict:
        """Explicitly supplied fields, with a single customer folded into the restriction lists."""
        changes = self.model_dump(exclude_unset=True, exclude={"customer_email", "customer_id"})
        if self.customer_email:
            changes["customer_emails"] = [*(changes.get("customer_emails") or []), self.customer_email]
        if self.customer_id:
            changes["customer_ids"] = [*(changes.get("customer_ids") or []), self.customer_id]
        return changes


class CreateOfferRequest(OfferFields):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "WELCOME10",
                    "title": "Welcome offer",
                    "description": "10% off your first order",
                    "discount_type": "percentage",
                    "discount_value": 10,
                    "max_discount": 500,
                    "valid_until": "2025-12-31",
                    "one_time_per_user": True,
                }
            ]
        }
    }

    title: RequiredStr = Field(..., max_length=200)
    discount_type: DiscountType
    discount_value: float = Field(..., ge=0)


class UpdateOfferRequest(OfferFields):
    title: RequiredStr = Field(None, max_length=200)


class ValidateOfferRequest(BaseModel):
    offer_id: str | None = None
    offer_code: TrimmedStr | None = None
    subtotal: float | None = Field(None, ge=0)
    customer_email: str | None = None
    customer_id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "offer_code": "WELCOME10",
                    "subtotal": 2499,
                    "customer_email": "asha@example.com",
                }
            ]
        }
    }
