"""Back-office dashboard figures.

Revenue recognition: cash-on-delivery orders count once delivered, every
other payment method counts once paid. Cancelled orders never count.
"""

from datetime import datetime, time

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from catalogue.product.product import Product
from fulfillment.task.task import Task, TaskStatus
from ordering.domain import stats_cache
from ordering.order.order import Order, OrderStatus, PaymentStatus
from shared.database import as_utc, utc_now

LOW_STOCK_THRESHOLD = 5


def counts_as_revenue(order: Order) -> bool:
    if (order.total or 0) <= 0 or order.status == OrderStatus.CANCELLED.value:
        return False
    if order.is_cod:
        return order.status == OrderStatus.DELIVERED.value
    return order.payment_status == PaymentStatus.PAID.value


def _start_of_today() -> datetime:
    now = utc_now()
    return datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)


def compute_dashboard_stats(session: Session) -> dict:
    orders = session.scalars(select(Order)).all()
    today = _start_of_today()
    todays_orders = [order for order in orders if as_utc(order.created_at) >= today]

    stats = {"total_orders": len(orders)}
    for status in OrderStatus:
        stats[f"{status.value}_orders"] = sum(1 for order in orders if order.status == status.value)
    stats["total_revenue"] = round(sum(order.total for order in orders if counts_as_revenue(order)), 2)
    stats["today_orders"] = len(todays_orders)
    stats["today_revenue"] = round(sum(order.total for order in todays_orders if counts_as_revenue(order)), 2)

    stats["product_count"] = session.scalar(select(func.count()).select_from(Product)) or 0
    stats["low_stock_count"] = (
        session.scalar(select(func.count()).select_from(Product).where(Product.stock_qty <= LOW_STOCK_THRESHOLD))
        or 0
    )

    tasks = session.scalars(select(Task)).all()
    stats["pending_tasks"] = sum(1 for task in tasks if task.status == TaskStatus.PENDING.value)
    stats["in_progress_tasks"] = sum(1 for task in tasks if task.status == TaskStatus.IN_PROGRESS.value)
    stats["completed_tasks_today"] = sum(
        1
        for task in tasks
        if task.status == TaskStatus.COMPLETED.value and task.completed_at and as_utc(task.completed_at) >= today
    )
    return stats


def dashboard_stats(session: Session) -> dict:
    return stats_cache.get_or_set("dashboard", lambda: compute_dashboard_stats(session))
