"""Core exception carrying a structured ErrorDetail."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from proxy_service_libs.error_enums import ErrorCode


class ErrorDetail(BaseModel):
    """Structured description of a failure raised inside a route."""

    error_code: ErrorCode
    message: str
    status_code: int = 500
    correlation_id: UUID | None = None
    timestamp: datetime
    service: str
    operation: str
    details: dict[str, str] = Field(default_factory=dict)


class ProxyServiceError(Exception):
    """Exception raised by routes and converted to an envelope by the app handlers."""

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail

    def __str__(self) -> str:
        return f"[{self.error_detail.error_code.value}] {self.error_detail.message}"

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def status_code(self) -> int:
        return self.error_detail.status_code

    @property
    def correlation_id(self) -> str | None:
        if self.error_detail.correlation_id is None:
            return None
        return str(self.error_detail.correlation_id)
