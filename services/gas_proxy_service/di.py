"""Dependency Injection providers for the GAS Proxy Service.

APP-scoped infrastructure (settings, pooled HTTP client, outbound components)
and REQUEST-scoped correlation context.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from uuid import UUID, uuid4

import httpx
from dishka import Provider, Scope, from_context, provide
from fastapi import Request

from services.gas_proxy_service.clients.action_client import UpstreamActionClientImpl
from services.gas_proxy_service.clients.asset_uploader import GitHubAssetUploaderImpl
from services.gas_proxy_service.config import ProxySettings
from services.gas_proxy_service.implementations.media_resolver import PhotoUrlMediaResolver
from services.gas_proxy_service.protocols import (
    AssetUploaderProtocol,
    MediaResolverProtocol,
    UpstreamActionClientProtocol,
)


class GasProxyProvider(Provider):
    """Infrastructure provider for the GAS Proxy Service.

    Settings are passed in at construction so the container never reads the
    environment on its own.
    """

    scope = Scope.APP

    def __init__(self, settings: ProxySettings) -> None:
        super().__init__()
        self._settings = settings

    @provide
    def get_config(self) -> ProxySettings:
        """Provide the settings built at startup."""
        return self._settings

    @provide(scope=Scope.APP)
    async def get_http_client(self, config: ProxySettings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide shared HTTP client with connection pooling."""
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(
                config.HTTP_CLIENT_TIMEOUT_SECONDS,
                connect=config.HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS,
            )
        ) as client:
            yield client

    @provide(scope=Scope.APP)
    def provide_action_client(
        self, http_client: httpx.AsyncClient, config: ProxySettings
    ) -> UpstreamActionClientProtocol:
        return UpstreamActionClientImpl(http_client, config)

    @provide(scope=Scope.APP)
    def provide_asset_uploader(
        self, http_client: httpx.AsyncClient, config: ProxySettings
    ) -> AssetUploaderProtocol:
        return GitHubAssetUploaderImpl(http_client, config)

    @provide(scope=Scope.APP)
    def provide_media_resolver(
        self, http_client: httpx.AsyncClient, config: ProxySettings
    ) -> MediaResolverProtocol:
        return PhotoUrlMediaResolver(http_client, config)


class RequestContextProvider(Provider):
    """Request-scoped provider for correlation context."""

    request = from_context(provides=Request, scope=Scope.REQUEST)

    @provide(scope=Scope.REQUEST)
    def provide_correlation_id(self, request: Request) -> UUID:
        """Provide correlation ID from request state (set by CorrelationIDMiddleware)."""
        return getattr(request.state, "correlation_id", uuid4())
