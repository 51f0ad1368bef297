"""Pydantic request/response schemas for the Razorpay checkout API.

Fields are optional at this layer; the checkout services own the validation
order and its error messages.
"""

from pydantic import BaseModel


class CustomerSchema(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None


class CreateGatewayOrderRequest(BaseModel):
    amount: int | float | None = None
    currency: str | None = None
    customer: CustomerSchema | None = None
    notes: dict | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "amount": 249900,
                    "currency": "INR",
                    "customer": {"name": "Asha Rao", "email": "asha@example.com", "phone": "9876543210"},
                    "notes": {"items_count": 2},
                }
            ]
        }
    }


class CreateGatewayOrderResponse(BaseModel):
    success: bool = True
    order_id: str
    amount: int
    currency: str
    key_id: str


class VerifyPaymentRequest(BaseModel):
    razorpay_order_id: str | None = None
    razorpay_payment_id: str | None = None
    razorpay_signature: str | None = None
    orderData: dict | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "razorpay_order_id": "order_NZ3x0b9bX1",
                    "razorpay_payment_id": "pay_NZ3x9QkQ2v",
                    "razorpay_signature": "5f0d6c...",
                    "orderData": {
                        "items": [{"product_id": "va-01", "sku": "VA-EAR-001", "title": "Kundan Jhumka", "quantity": 1, "price": 2499}],
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
                    },
                }
            ]
        }
    }


class VerifyPaymentResponse(BaseModel):
    success: bool = True
    order_id: str
    order_number: str
    payment_id: str
    message: str
