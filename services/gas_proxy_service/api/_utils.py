"""Shared helpers for GAS Proxy Service routes."""

from __future__ import annotations

import json
from typing import Any
from uuid import UUID

from fastapi import Request
from fastapi.responses import JSONResponse
from proxy_service_libs.error_handling import ErrorEnvelope, raise_client_input_error

SERVICE = "gas_proxy_service"


def _is_json_media_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def read_json_object(request: Request, operation: str, correlation_id: UUID) -> dict[str, Any]:
    """Return the request body as a dict.

    Bodies that are empty or not declared as JSON read as ``{}``. Declared
    JSON that does not parse to an object is rejected with a 400 envelope.
    """
    if not _is_json_media_type(request.headers.get("content-type", "")):
        return {}

    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except ValueError:
        raise_client_input_error(
            service=SERVICE,
            operation=operation,
            message="Malformed JSON request body",
            correlation_id=correlation_id,
        )

    if not isinstance(data, dict):
        raise_client_input_error(
            service=SERVICE,
            operation=operation,
            message="Request body must be a JSON object",
            correlation_id=correlation_id,
        )
    return data


def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    """Build a ``{success: false, error, details?}`` response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorEnvelope(error=error, details=details).to_content(),
    )
