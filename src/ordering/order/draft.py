"""Typed order drafts submitted by the storefront, the back-office and the
payment confirmation callback.

The storefront checkout is the strict variant: a phone number and a complete
delivery address are required. Back-office entry and gateway confirmations
accept partial contact and address details.
"""

from pydantic import BaseModel, Field

from ordering.order.order import OrderStatus, PaymentMethod, PaymentStatus
from shared.api import LowercaseStr, RequiredStr, TrimmedStr

DEFAULT_COUNTRY = "India"


class OrderLine(BaseModel):
    product_id: RequiredStr
    sku: TrimmedStr | None = None
    title: str | None = None
    quantity: int = Field(..., ge=1)
    price: float = Field(0, ge=0)
    image: str | None = None
    images: list[str] = Field(default_factory=list)

    def to_item(self) -> dict:
        item = {
            "product_id": self.product_id,
            "sku": self.sku or self.product_id,
            "title": self.title,
            "quantity": self.quantity,
            "price": self.price,
        }
        image = self.image or next(iter(self.images), None)
        if image:
            item["image"] = image
        return item


class CustomerDetails(BaseModel):
    name: RequiredStr
    email: LowercaseStr
    phone: TrimmedStr | None = None


class StorefrontCustomer(CustomerDetails):
    phone: RequiredStr


class ShippingAddress(BaseModel):
    name: TrimmedStr | None = None
    address_line1: TrimmedStr | None = None
    address_line2: TrimmedStr | None = None
    city: TrimmedStr | None = None
    state: TrimmedStr | None = None
    pincode: TrimmedStr | None = None
    country: RequiredStr = DEFAULT_COUNTRY

    def to_address(self) -> dict:
        address = self.model_dump(exclude={"address_line2"})
        if self.address_line2:
            address["address_line2"] = self.address_line2
        return address


class DeliveryAddress(ShippingAddress):
    address_line1: RequiredStr
    city: RequiredStr
    state: RequiredStr
    pincode: RequiredStr


class OrderDraft(BaseModel):
    """Order contents shared by every entry point."""

    model_config = {"use_enum_values": True}

    items: list[OrderLine] = Field(..., min_length=1)
    customer: CustomerDetails
    shipping_address: ShippingAddress
    subtotal: float = Field(0, ge=0)
    shipping: float = Field(0, ge=0)
    discount: float = Field(0, ge=0)
    total: float = Field(0, ge=0)
    offer_id: str | None = None
    payment_method: PaymentMethod = PaymentMethod.COD.value
    payment_status: PaymentStatus = PaymentStatus.PENDING.value
    status: OrderStatus = OrderStatus.PENDING.value
    user_id: str | None = None

    def order_fields(self) -> dict:
        """Keyword arguments for ``create_order``."""
        return {
            "items": [line.to_item() for line in self.items],
            "customer": self.customer.model_dump(),
            "shipping_address": self.shipping_address.to_address(),
            "subtotal": self.subtotal,
            "shipping": self.shipping,
            "discount": self.discount,
            "total": self.total,
            "offer_id": self.offer_id or None,
            "payment_method": self.payment_method,
            "payment_status": self.payment_status,
            "status": self.status,
            "user_id": self.user_id or None,
        }


class StorefrontOrderDraft(OrderDraft):
    customer: StorefrontCustomer
    shipping_address: DeliveryAddress


class GatewayOrderDraft(OrderDraft):
    """``orderData`` echoed back with a gateway payment confirmation."""

    customer: dict = Field(default_factory=dict)
    shipping_address: dict = Field(default_factory=dict)
    payment_method: PaymentMethod = PaymentMethod.RAZORPAY.value

    def order_fields(self) -> dict:
        return {
            "items": [line.to_item() for line in self.items],
            "customer": dict(self.customer),
            "shipping_address": dict(self.shipping_address),
            "subtotal": self.subtotal,
            "shipping": self.shipping,
            "discount": self.discount,
            "total": self.total,
            "offer_id": self.offer_id or None,
            "payment_method": self.payment_method,
            "user_id": self.user_id or None,
        }
