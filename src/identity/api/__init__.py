"""Identity domain API package."""

from identity.api.routes import (
    address_router,
    admin_auth_router,
    auth_router,
    customer_router,
    profile_router,
    wishlist_router,
    worker_router,
)

__all__ = [
    "auth_router",
    "profile_router",
    "address_router",
    "wishlist_router",
    "admin_auth_router",
    "worker_router",
    "customer_router",
]
