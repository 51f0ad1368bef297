"""FastAPI routes for the Ordering domain: orders, offers and dashboard stats."""

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from ordering.api.schemas import (
    CancelOrderRequest,
    CreateOfferRequest,
    ManualOrderRequest,
    PlaceOrderRequest,
    RefundUpdateRequest,
    UpdateOfferRequest,
    UpdateOrderRequest,
    ValidateOfferRequest,
)
from ordering.offer.management import create_offer, delete_offer, list_offers, update_offer
from ordering.offer.validation import list_active_offers, validate_offer
from ordering.order.cancellation import cancel_order
from ordering.order.creation import create_manual_order, place_cod_order
from ordering.order.management import update_order
from ordering.order.order import Order
from ordering.order.queries import get_order_for_staff, list_orders_for_staff, list_user_orders
from ordering.order.refund import refund_details, update_refund_status
from ordering.stats import dashboard_stats
from shared.auth import (
    Principal,
    PrincipalKind,
    get_current_customer,
    get_optional_principal,
    require_staff,
    require_superuser,
)
from shared.config import get_settings
from shared.database import get_or_raise, get_session
from shared.ratelimit import rate_limited, register_limiter

_settings = get_settings()
order_limiter = register_limiter(_settings.order_rate_limit, _settings.rate_limit_window_seconds)


# ---------------------------------------------------------------------------
# Storefront orders
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.post("/create", status_code=201, dependencies=[Depends(rate_limited(order_limiter))])
async def create_order(
    body: PlaceOrderRequest,
    session: Session = Depends(get_session),
    principal: Principal | None = Depends(get_optional_principal),
):
    if principal is not None and principal.kind == PrincipalKind.CUSTOMER.value:
        body = body.model_copy(update={"user_id": principal.subject})
    order = place_cod_order(session, body)
    return {
        "success": True,
        "order_id": order.id,
        "order_number": order.order_number,
        "order": order.to_dict(),
    }


@order_router.get("")
async def list_orders(
    user_id: str | None = None,
    session: Session = Depends(get_session),
    principal: Principal | None = Depends(get_optional_principal),
):
    if not user_id and principal is not None and principal.kind == PrincipalKind.CUSTOMER.value:
        user_id = principal.subject
    orders = list_user_orders(session, user_id)
    return {"success": True, "orders": [order.to_dict() for order in orders]}


@order_router.get("/{order_id}")
async def get_order(order_id: str, session: Session = Depends(get_session)):
    order = get_or_raise(session, Order, order_id)
    return {"success": True, "order": order.to_dict()}


@order_router.put("/{order_id}")
async def cancel_own_order(
    order_id: str,
    body: CancelOrderRequest | None = Body(default=None),
    session: Session = Depends(get_session),
    customer: Principal = Depends(get_current_customer),
):
    action = body.action if body is not None else "cancel"
    order, message = cancel_order(session, order_id, customer, action=action)
    return {"success": True, "message": message, "order": order.to_dict()}


# ---------------------------------------------------------------------------
# Back-office orders
# ---------------------------------------------------------------------------
admin_order_router = APIRouter(prefix="/api/admin/orders", tags=["admin-orders"])


@admin_order_router.get("")
async def list_admin_orders(
    status: str | None = None,
    assigned_to: str | None = None,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_staff),
):
    statuses = [value.strip() for value in status.split(",") if value.strip()] if status else None
    orders = list_orders_for_staff(session, staff, statuses=statuses, assigned_to=assigned_to)
    return {"success": True, "orders": [order.to_dict() for order in orders]}


@admin_order_router.post("", status_code=201)
async def create_admin_order(
    body: ManualOrderRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_superuser),
):
    order = create_manual_order(session, body)
    return {"success": True, "order": order.to_dict()}


@admin_order_router.get("/{order_id}")
async def get_admin_order(
    order_id: str,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_staff),
):
    order = get_order_for_staff(session, order_id, staff)
    return {"success": True, "order": order.to_dict()}


@admin_order_router.put("/{order_id}")
async def update_admin_order(
    order_id: str,
    body: UpdateOrderRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_staff),
):
    order = update_order(session, order_id, body.model_dump(exclude_unset=True), staff)
    return {"success": True, "order": order.to_dict()}


@admin_order_router.get("/{order_id}/refund")
async def get_refund(
    order_id: str,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_superuser),
):
    return {"success": True, "refund": refund_details(session, order_id)}


@admin_order_router.put("/{order_id}/refund")
async def update_refund(
    order_id: str,
    body: RefundUpdateRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_superuser),
):
    order = update_refund_status(
        session,
        order_id,
        body.refund_status,
        refund_id=body.refund_id,
        notes=body.notes,
    )
    return {"success": True, "order": order.to_dict()}


# ---------------------------------------------------------------------------
# Offers
# ---------------------------------------------------------------------------
offer_router = APIRouter(prefix="/api/offers", tags=["offers"])


@offer_router.get("")
async def get_active_offers(
    customer_email: str | None = None,
    customer_id: str | None = None,
    session: Session = Depends(get_session),
):
    return {"success": True, "offers": list_active_offers(session, customer_email, customer_id)}


@offer_router.post("/validate")
async def validate(body: ValidateOfferRequest, session: Session = Depends(get_session)):
    offer, discount = validate_offer(
        session,
        subtotal=body.subtotal,
        offer_id=body.offer_id,
        offer_code=body.offer_code,
        customer_email=body.customer_email,
        customer_id=body.customer_id,
    )
    return {
        "success": True,
        "offer": {
            "id": offer.id,
            "code": offer.code,
            "title": offer.title,
            "description": offer.description,
            "discount_type": offer.discount_type,
            "discount_value": offer.discount_value,
        },
        "discount": discount,
    }


admin_offer_router = APIRouter(prefix="/api/admin/offers", tags=["admin-offers"])


@admin_offer_router.get("")
async def get_all_offers(session: Session = Depends(get_session), staff: Principal = Depends(require_superuser)):
    return {"success": True, "offers": [offer.to_dict() for offer in list_offers(session)]}


@admin_offer_router.post("", status_code=201)
async def add_offer(
    body: CreateOfferRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_superuser),
):
    offer = create_offer(session, body.offer_changes(), created_by=staff.subject)
    return {"success": True, "offer": offer.to_dict()}


@admin_offer_router.put("/{offer_id}")
async def edit_offer(
    offer_id: str,
    body: UpdateOfferRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_superuser),
):
    offer = update_offer(session, offer_id, body.offer_changes())
    return {"success": True, "offer": offer.to_dict()}


@admin_offer_router.delete("/{offer_id}")
async def remove_offer(
    offer_id: str,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_superuser),
):
    delete_offer(session, offer_id)
    return {"success": True, "message": "Offer deleted successfully"}


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------
stats_router = APIRouter(prefix="/api/admin/stats", tags=["admin-stats"])


@stats_router.get("")
async def get_stats(session: Session = Depends(get_session), staff: Principal = Depends(require_staff)):
    return {"success": True, "stats": dashboard_stats(session)}
