"""Inline PhotoURL images in action responses as base64 data URIs.

The walk is depth-first over dicts and lists using an explicit stack, so
arbitrarily deep payloads do not hit the interpreter recursion limit.
Fetch failures are logged and the original URL is kept; nothing here fails
the surrounding request.
"""

from __future__ import annotations

import asyncio
import base64
from collections.abc import Iterator
from typing import cast
from uuid import UUID

import httpx
from proxy_service_libs.error_enums import ErrorCode
from proxy_service_libs.logging_utils import create_service_logger

from services.gas_proxy_service.clients._utils import describe_transport_error
from services.gas_proxy_service.config import ProxySettings
from services.gas_proxy_service.models_api import JsonValue

logger = create_service_logger("gas_proxy.media_resolver")

MEDIA_FIELD = "PhotoURL"
DEFAULT_MEDIA_TYPE = "image/jpeg"
_FETCHABLE_PREFIXES = ("http://", "https://")


def to_data_uri(content: bytes, media_type: str | None) -> str:
    """Encode bytes as ``data:<mime>;base64,<payload>``."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{media_type or DEFAULT_MEDIA_TYPE};base64,{encoded}"


def iter_media_fields(value: JsonValue) -> Iterator[tuple[dict[str, JsonValue], str]]:
    """Yield ``(container, key)`` for every fetchable PhotoURL, depth-first.

    Containers are visited once each, so a cyclic in-memory structure
    terminates. Values under PhotoURL that are themselves containers are
    descended into like any other value.
    """
    stack: list[JsonValue] = [value]
    seen: set[int] = set()

    while stack:
        node = stack.pop()
        if not isinstance(node, (dict, list)) or id(node) in seen:
            continue
        seen.add(id(node))

        if isinstance(node, list):
            stack.extend(reversed(node))
            continue

        children: list[JsonValue] = []
        for key, child in node.items():
            if (
                key == MEDIA_FIELD
                and isinstance(child, str)
                and child.startswith(_FETCHABLE_PREFIXES)
            ):
                yield node, key
            elif isinstance(child, (dict, list)):
                children.append(child)
        stack.extend(reversed(children))


class PhotoUrlMediaResolver:
    """Fetches PhotoURL targets and replaces them with data URIs."""

    def __init__(self, http_client: httpx.AsyncClient, settings: ProxySettings) -> None:
        self._client = http_client
        self._timeout = settings.MEDIA_FETCH_TIMEOUT_SECONDS
        self._concurrency = settings.MEDIA_FETCH_CONCURRENCY

    async def resolve(self, value: JsonValue, correlation_id: UUID) -> None:
        targets = list(iter_media_fields(value))
        if not targets:
            return

        logger.debug(
            "Resolving media fields",
            extra={"field_count": len(targets), "correlation_id": str(correlation_id)},
        )

        if self._concurrency == 1:
            for container, key in targets:
                await self._resolve_field(container, key, correlation_id)
            return

        semaphore = asyncio.Semaphore(self._concurrency)

        async def bounded(container: dict[str, JsonValue], key: str) -> None:
            async with semaphore:
                await self._resolve_field(container, key, correlation_id)

        await asyncio.gather(*(bounded(container, key) for container, key in targets))

    async def _resolve_field(
        self,
        container: dict[str, JsonValue],
        key: str,
        correlation_id: UUID,
    ) -> None:
        url = cast(str, container[key])

        try:
            response = await self._client.get(
                url, timeout=self._timeout, follow_redirects=True
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(
                "Error converting image URL to base64",
                extra={
                    "url": url,
                    "error": describe_transport_error(e),
                    "error_code": ErrorCode.MEDIA_FETCH_FAILURE.value,
                    "correlation_id": str(correlation_id),
                },
            )
            return

        if not response.is_success:
            logger.warning(
                "Failed to fetch image",
                extra={
                    "url": url,
                    "status_code": response.status_code,
                    "error_code": ErrorCode.MEDIA_FETCH_FAILURE.value,
                    "correlation_id": str(correlation_id),
                },
            )
            return

        container[key] = to_data_uri(response.content, response.headers.get("content-type"))
