"""HTTP-facing helpers shared by every bounded context's routers."""

from typing import Annotated

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, StringConstraints
from pydantic import ValidationError as SchemaValidationError

from shared.exceptions import VairanyaError

logger = structlog.get_logger(__name__)

# Reusable field types for request schemas
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]
RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
LowercaseStr = Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=1)]
UppercaseStr = Annotated[str, StringConstraints(strip_whitespace=True, to_upper=True)]


class StatusResponse(BaseModel):
    success: bool = True
    message: str | None = None


def error_response(status_code: int, message: str, errors: dict | None = None) -> JSONResponse:
    content = {"success": False, "error": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


def validation_messages(errors: list[dict]) -> dict[str, list[str]]:
    """Group pydantic error entries into ``{"field.path": [message, ...]}``."""
    messages: dict[str, list[str]] = {}
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(location) or "_entity"
        messages.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return messages


def _validation_error_response(errors: list[dict]) -> JSONResponse:
    messages = validation_messages(errors)
    if not messages:
        return error_response(400, "Invalid request")
    field, field_messages = next(iter(messages.items()))
    return error_response(400, f"{field}: {field_messages[0]}", messages)


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain exceptions into the ``{success: false, error}`` envelope."""

    @app.exception_handler(VairanyaError)
    async def handle_domain_error(request: Request, exc: VairanyaError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("request_failed", path=request.url.path, error=exc.message)
        return error_response(exc.status_code, exc.message, exc.messages)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _validation_error_response(exc.errors())

    @app.exception_handler(SchemaValidationError)
    async def handle_schema_validation(request: Request, exc: SchemaValidationError) -> JSONResponse:
        return _validation_error_response(exc.errors())

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", path=request.url.path)
        return error_response(500, "Internal server error")
