"""Proxy v1 DTOs.

Response bodies produced by the proxy itself. Upstream action responses are
forwarded verbatim and have no DTO; failures use
``proxy_service_libs.error_handling.ErrorEnvelope``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class UploadImageResponseV1(BaseModel):
    """Successful ``/upload-image`` response."""

    success: Literal[True] = True
    url: str
