"""Upstream action endpoint (Apps Script web app) HTTP client."""

from __future__ import annotations

import json
from typing import Any
from uuid import UUID

import httpx
from proxy_service_libs import Result
from proxy_service_libs.error_enums import ErrorCode
from proxy_service_libs.logging_utils import create_service_logger

from services.gas_proxy_service.clients._utils import (
    UPSTREAM_SNIPPET_LENGTH,
    build_upstream_headers,
    describe_transport_error,
)
from services.gas_proxy_service.config import ProxySettings
from services.gas_proxy_service.models_api import (
    JsonValue,
    UpstreamError,
    UpstreamFailure,
    UpstreamMalformedResponse,
    UpstreamTransportError,
)

logger = create_service_logger("gas_proxy.action_client")


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not valid JSON")


class UpstreamActionClientImpl:
    """HTTP client for the single upstream action endpoint."""

    def __init__(self, http_client: httpx.AsyncClient, settings: ProxySettings) -> None:
        """Initialize with shared HTTP client.

        Args:
            http_client: Shared httpx AsyncClient instance
            settings: Service settings providing GAS_URL
        """
        self._client = http_client
        self._url = settings.GAS_URL

    async def send(
        self,
        action: str,
        payload: dict[str, Any],
        correlation_id: UUID,
    ) -> Result[JsonValue, UpstreamError]:
        """Send an action request and parse the JSON reply.

        The body is read as text first so non-JSON replies can be reported
        with a snippet instead of a decoder traceback.
        """
        body = {"action": action, **payload}

        logger.debug(
            "Sending action to upstream",
            extra={"action": action, "correlation_id": str(correlation_id)},
        )

        try:
            response = await self._client.post(
                self._url, json=body, headers=build_upstream_headers()
            )
        except httpx.TransportError as e:
            message = describe_transport_error(e)
            logger.error(
                "Upstream transport error",
                extra={
                    "error_code": ErrorCode.TRANSPORT_ERROR.value,
                    "action": action,
                    "error": message,
                    "correlation_id": str(correlation_id),
                },
            )
            return Result.err(UpstreamTransportError(message))

        raw_text = response.text
        try:
            result = json.loads(raw_text, parse_constant=_reject_constant)
        except ValueError:
            snippet = raw_text[:UPSTREAM_SNIPPET_LENGTH]
            logger.error(
                "Upstream returned non-JSON response",
                extra={
                    "error_code": ErrorCode.UPSTREAM_MALFORMED.value,
                    "action": action,
                    "status_code": response.status_code,
                    "snippet": snippet,
                    "correlation_id": str(correlation_id),
                },
            )
            return Result.err(UpstreamMalformedResponse(response.status_code, snippet))

        if not response.is_success:
            logger.error(
                "Upstream request failed",
                extra={
                    "error_code": ErrorCode.UPSTREAM_FAILURE.value,
                    "action": action,
                    "status_code": response.status_code,
                    "body": result,
                    "correlation_id": str(correlation_id),
                },
            )
            return Result.err(UpstreamFailure(response.status_code, result))

        logger.info(
            "Upstream action completed",
            extra={
                "action": action,
                "status_code": response.status_code,
                "correlation_id": str(correlation_id),
            },
        )
        return Result.ok(result)
