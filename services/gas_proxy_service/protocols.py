"""Protocol definitions for the GAS Proxy Service.

Defines interfaces for the outbound components used in dependency injection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol
from uuid import UUID

if TYPE_CHECKING:
    from proxy_service_libs import Result

    from services.gas_proxy_service.models_api import (
        JsonValue,
        UploadedAsset,
        UploadError,
        UpstreamError,
    )


class UpstreamActionClientProtocol(Protocol):
    """Protocol for the Apps Script action endpoint client."""

    async def send(
        self,
        action: str,
        payload: dict[str, Any],
        correlation_id: UUID,
    ) -> Result[JsonValue, UpstreamError]:
        """POST ``{"action": action, **payload}`` to the upstream endpoint.

        Args:
            action: Upstream action identifier
            payload: Caller-supplied fields merged after the action
            correlation_id: Request correlation ID for tracing

        Returns:
            Result.ok(parsed JSON body) on a 2xx JSON response, otherwise
            Result.err with the failure variant
        """
        ...


class AssetUploaderProtocol(Protocol):
    """Protocol for the binary asset host."""

    @property
    def is_configured(self) -> bool: ...

    async def upload(
        self,
        base64_content: str,
        file_name: str,
        correlation_id: UUID,
    ) -> Result[UploadedAsset, UploadError]:
        """Store base64 content under a timestamped path.

        Args:
            base64_content: File content, already base64 encoded
            file_name: Original file name, sanitized before use
            correlation_id: Request correlation ID for tracing

        Returns:
            Result.ok(UploadedAsset) with the public download URL, or Result.err
        """
        ...


class MediaResolverProtocol(Protocol):
    """Protocol for inlining PhotoURL images as data URIs."""

    async def resolve(self, value: JsonValue, correlation_id: UUID) -> None:
        """Replace every resolvable PhotoURL in ``value`` in place.

        Never raises for fetch problems; failed fields keep their URL.
        """
        ...
