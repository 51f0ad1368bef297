"""Catalogue domain API package."""

from catalogue.api.routes import (
    admin_carousel_router,
    admin_category_router,
    admin_collection_router,
    admin_product_router,
    admin_settings_router,
    carousel_router,
    category_router,
    collection_router,
    product_router,
    settings_router,
)

__all__ = [
    "product_router",
    "admin_product_router",
    "category_router",
    "admin_category_router",
    "collection_router",
    "admin_collection_router",
    "carousel_router",
    "admin_carousel_router",
    "settings_router",
    "admin_settings_router",
]
