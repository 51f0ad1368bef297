"""Fulfillment domain API package."""

from fulfillment.api.routes import task_router, workflow_router

__all__ = ["task_router", "workflow_router"]
