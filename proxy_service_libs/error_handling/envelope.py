"""Uniform failure envelope returned by every JSON-producing route."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel


class ErrorEnvelope(BaseModel):
    """``{success: false, error, details?}`` response body."""

    success: Literal[False] = False
    error: str
    details: str | None = None

    def to_content(self) -> dict[str, Any]:
        """Serialize for a JSONResponse, omitting ``details`` when unset."""
        return self.model_dump(exclude_none=True)
