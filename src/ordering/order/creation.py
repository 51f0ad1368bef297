"""Order creation and the best-effort follow-up writes.

An order is committed on its own first. Offer-usage accounting, stock
decrements and the customer-directory upsert run afterwards, each in its own
transaction; a failure in any of them is logged and swallowed, never retried
or compensated, and never undoes the order.
"""

from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from catalogue.product.product import Product
from identity.customer.customer import upsert_customer
from ordering.domain import logger
from ordering.offer.usage import record_offer_usage
from ordering.order.draft import OrderDraft
from ordering.order.order import Order, OrderStatus, PaymentMethod, PaymentStatus, order_number_for
from shared.cache import caches
from shared.database import utc_now


def generate_order_number(session: Session, moment: datetime | None = None) -> str:
    """Derive the order number from the clock, stepping forward a millisecond on collision."""
    moment = moment or utc_now()
    number = order_number_for(moment)
    while session.scalar(select(Order.id).where(Order.order_number == number)) is not None:
        moment += timedelta(milliseconds=1)
        number = order_number_for(moment)
    return number


def create_order(
    session: Session,
    *,
    items: list[dict],
    customer: dict,
    shipping_address: dict,
    subtotal: float = 0.0,
    shipping: float = 0.0,
    discount: float = 0.0,
    total: float = 0.0,
    offer_id: str | None = None,
    payment_method: str = PaymentMethod.COD.value,
    payment_status: str = PaymentStatus.PENDING.value,
    status: str = OrderStatus.PENDING.value,
    razorpay_order_id: str | None = None,
    razorpay_payment_id: str | None = None,
    user_id: str | None = None,
) -> Order:
    order = Order(
        order_number=generate_order_number(session),
        items=items,
        customer=customer,
        shipping_address=shipping_address,
        subtotal=subtotal,
        shipping=shipping,
        discount=discount,
        total=total,
        offer_id=offer_id or None,
        payment_method=payment_method,
        payment_status=payment_status,
        status=status,
        razorpay_order_id=razorpay_order_id,
        razorpay_payment_id=razorpay_payment_id,
        user_id=user_id or None,
    )
    session.add(order)
    session.commit()

    caches.invalidate("stats")
    logger.info(
        "order_created",
        order_id=order.id,
        order_number=order.order_number,
        payment_method=order.payment_method,
        status=order.status,
    )
    return order


# ---------------------------------------------------------------------------
# Best-effort follow-up writes
# ---------------------------------------------------------------------------
def _increment_offer_usage(session: Session, order: Order) -> None:
    if not order.offer_id:
        return
    try:
        record_offer_usage(
            session,
            order.offer_id,
            customer_email=(order.customer or {}).get("email"),
            customer_id=order.user_id,
            order_id=order.id,
        )
    except Exception:
        session.rollback()
        logger.exception("offer_usage_increment_failed", order_id=order.id, offer_id=order.offer_id)


def _decrement_stock(session: Session, order: Order) -> None:
    for item in order.items or []:
        try:
            product = session.get(Product, item["product_id"])
            if product is None:
                logger.warning("stock_decrement_skipped", order_id=order.id, product_id=item["product_id"])
                continue
            product.decrement_stock(int(item["quantity"]))
            session.commit()
        except Exception:
            session.rollback()
            logger.exception("stock_decrement_failed", order_id=order.id, product_id=item.get("product_id"))
    caches.invalidate("products", "stats")


def _sync_customer(session: Session, order: Order) -> None:
    customer = order.customer or {}
    if not customer.get("email"):
        return
    try:
        upsert_customer(
            session,
            email=customer["email"],
            name=customer.get("name"),
            phone=customer.get("phone"),
            user_id=order.user_id,
        )
    except Exception:
        session.rollback()
        logger.exception("customer_sync_failed", order_id=order.id, email=customer.get("email"))


def apply_post_order_effects(session: Session, order: Order) -> None:
    _increment_offer_usage(session, order)
    _decrement_stock(session, order)
    _sync_customer(session, order)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------
def place_cod_order(session: Session, draft: OrderDraft) -> Order:
    """Storefront checkout without online payment (cash on delivery / manual)."""
    order = create_order(session, **draft.order_fields())
    apply_post_order_effects(session, order)
    return order


def create_manual_order(session: Session, draft: OrderDraft) -> Order:
    """Back-office order entry; no inventory or offer side effects."""
    return create_order(session, **draft.order_fields())
