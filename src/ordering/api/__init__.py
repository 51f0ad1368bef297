"""Ordering domain API package."""

from ordering.api.routes import (
    admin_offer_router,
    admin_order_router,
    offer_router,
    order_router,
    stats_router,
)

__all__ = ["order_router", "admin_order_router", "offer_router", "admin_offer_router", "stats_router"]
