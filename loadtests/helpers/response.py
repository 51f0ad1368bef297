"""Response error extraction for load test observability.

Parses Vairanya API error responses into human-readable messages. Every
error uses one envelope: ``{"success": false, "error": "msg", "errors": {...}}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a compact error message suitable for Locust failure messages and log lines."""
    try:
        body = response.json()
    except Exception:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    errors = body.get("errors")
    if isinstance(errors, dict) and len(errors) > 1:
        return " | ".join(f"{field}: {', '.join(map(str, messages))}" for field, messages in errors.items())
    if "error" in body:
        return str(body["error"])

    # Starlette's own 404/405 responses
    if "detail" in body:
        return str(body["detail"])
    return str(body)[:300]
