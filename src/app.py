"""Vairanya storefront and back-office API.

Every bounded context contributes its routers; domain errors are rendered as
the ``{success: false, error}`` envelope by the shared exception handlers.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import os
import time
import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from catalogue.api import (
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
from fulfillment.api import task_router, workflow_router
from identity.api import (
    address_router,
    admin_auth_router,
    auth_router,
    customer_router,
    profile_router,
    wishlist_router,
    worker_router,
)
from ordering.api import admin_offer_router, admin_order_router, offer_router, order_router, stats_router
from payments.api import razorpay_router
from reviews.api import admin_review_router, review_router
from shared.api import register_exception_handlers
from shared.config import get_settings
from shared.database import get_engine
from shared.utils.db import setup_db
from shared.utils.logging import configure_logging
from support.api import admin_message_router, message_router

configure_logging(to_files=get_settings().is_production)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not get_settings().is_production:
        setup_db()
    yield


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Vairanya API",
    description="Jewellery storefront and back-office: catalogue, orders, payments and fulfilment",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Bind a request id to every log line emitted while serving the request."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=request.method, path=request.url.path)

    started = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "request_completed",
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
for router in (
    # Storefront
    product_router,
    category_router,
    collection_router,
    carousel_router,
    settings_router,
    order_router,
    offer_router,
    razorpay_router,
    review_router,
    message_router,
    auth_router,
    profile_router,
    address_router,
    wishlist_router,
    # Back-office
    admin_auth_router,
    worker_router,
    customer_router,
    admin_product_router,
    admin_category_router,
    admin_collection_router,
    admin_carousel_router,
    admin_settings_router,
    admin_order_router,
    workflow_router,
    task_router,
    admin_offer_router,
    stats_router,
    admin_review_router,
    admin_message_router,
):
    app.include_router(router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
    except Exception:
        logger.exception("health_check_failed")
        return JSONResponse(status_code=503, content={"status": "unavailable", "database": "error"})
    return JSONResponse(content={"status": "ok", "database": "ok", "environment": get_settings().env})
