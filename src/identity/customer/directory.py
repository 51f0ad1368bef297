"""Back-office customer listing with order aggregates."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from identity.customer.customer import Customer
from ordering.order.order import Order, OrderStatus
from shared.database import as_utc, isoformat


def list_customers(session: Session) -> list[dict]:
    """Every known customer with order count, spend and last order date, biggest spenders first.

    Cancelled orders are left out of the spend. Emails that only appear on
    orders (never upserted) are listed too.
    """
    rows: dict[str, dict] = {}
    for customer in session.scalars(select(Customer)).all():
        rows[customer.email] = {
            **customer.to_dict(),
            "total_orders": 0,
            "total_spent": 0.0,
            "last_order_date": None,
        }

    last_seen = {}
    for order in session.scalars(select(Order)).all():
        info = order.customer or {}
        email = (info.get("email") or "").strip().lower()
        if not email:
            continue
        row = rows.setdefault(
            email,
            {
                "id": None,
                "email": email,
                "name": info.get("name"),
                "phone": info.get("phone"),
                "user_id": order.user_id,
                "created_at": isoformat(order.created_at),
                "total_orders": 0,
                "total_spent": 0.0,
                "last_order_date": None,
            },
        )
        row["total_orders"] += 1
        if order.status != OrderStatus.CANCELLED.value:
            row["total_spent"] = round(row["total_spent"] + (order.total or 0), 2)
        placed = as_utc(order.created_at)
        if email not in last_seen or placed > last_seen[email]:
            last_seen[email] = placed
            row["last_order_date"] = placed.isoformat()

    return sorted(rows.values(), key=lambda row: row["total_spent"], reverse=True)
