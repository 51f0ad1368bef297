"""Support domain API package."""

from support.api.routes import admin_message_router, message_router

__all__ = ["message_router", "admin_message_router"]
