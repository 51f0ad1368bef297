"""Reviews domain API package."""

from reviews.api.routes import admin_review_router, review_router

__all__ = ["review_router", "admin_review_router"]
