"""
Factory functions that build an ErrorDetail and raise ProxyServiceError.

Each factory fixes the error code and HTTP status so routes only supply
context.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import NoReturn
from uuid import UUID

from proxy_service_libs.error_enums import ErrorCode
from proxy_service_libs.error_handling.proxy_error import ErrorDetail, ProxyServiceError


def _raise(
    *,
    error_code: ErrorCode,
    status_code: int,
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID | None,
    **details: str,
) -> NoReturn:
    raise ProxyServiceError(
        ErrorDetail(
            error_code=error_code,
            message=message,
            status_code=status_code,
            correlation_id=correlation_id,
            timestamp=datetime.now(UTC),
            service=service,
            operation=operation,
            details=details,
        )
    )


def raise_client_input_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID | None = None,
    **details: str,
) -> NoReturn:
    """Missing or invalid fields in the inbound request (HTTP 400)."""
    _raise(
        error_code=ErrorCode.CLIENT_INPUT_ERROR,
        status_code=400,
        service=service,
        operation=operation,
        message=message,
        correlation_id=correlation_id,
        **details,
    )