"""FastAPI routes for the Razorpay checkout handshake."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from payments.api.schemas import (
    CreateGatewayOrderRequest,
    CreateGatewayOrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from payments.checkout.creation import create_gateway_order
from payments.checkout.verification import VERIFIED_MESSAGE, verify_payment
from shared.database import get_session

razorpay_router = APIRouter(prefix="/api/razorpay", tags=["payments"])


@razorpay_router.post("/create-order", response_model=CreateGatewayOrderResponse)
async def create_razorpay_order(body: CreateGatewayOrderRequest) -> CreateGatewayOrderResponse:
    gateway_order = create_gateway_order(
        body.amount,
        body.customer.model_dump() if body.customer else None,
        currency=body.currency,
        notes=body.notes,
    )
    return CreateGatewayOrderResponse(
        order_id=gateway_order["order_id"],
        amount=gateway_order["amount"],
        currency=gateway_order["currency"],
        key_id=gateway_order["key_id"],
    )


@razorpay_router.post("/verify-payment", response_model=VerifyPaymentResponse)
async def verify_razorpay_payment(
    body: VerifyPaymentRequest,
    session: Session = Depends(get_session),
) -> VerifyPaymentResponse:
    order = verify_payment(
        session,
        razorpay_order_id=body.razorpay_order_id,
        razorpay_payment_id=body.razorpay_payment_id,
        razorpay_signature=body.razorpay_signature,
        order_data=body.orderData,
    )
    return VerifyPaymentResponse(
        order_id=order.id,
        order_number=order.order_number,
        payment_id=order.razorpay_payment_id,
        message=VERIFIED_MESSAGE,
    )
