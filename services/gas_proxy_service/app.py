"""GAS Proxy Service - reverse proxy between the browser app, Apps Script and GitHub.

Serves the application shell and its config files, forwards actions to the
Apps Script endpoint (inlining PhotoURL images), and stores uploaded images
in a GitHub repository.
"""

from __future__ import annotations

import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from proxy_service_libs.error_enums import ErrorCode
from proxy_service_libs.error_handling.fastapi import (
    register_error_handlers as register_fastapi_error_handlers,
)
from proxy_service_libs.logging_utils import configure_service_logging, create_service_logger
from pydantic import ValidationError

from services.gas_proxy_service.api.health_routes import SERVICE_VERSION
from services.gas_proxy_service.api.health_routes import router as health_router
from services.gas_proxy_service.api.proxy_routes import router as proxy_router
from services.gas_proxy_service.api.static_routes import router as static_router
from services.gas_proxy_service.config import ProxySettings, load_settings
from services.gas_proxy_service.di import GasProxyProvider, RequestContextProvider
from services.gas_proxy_service.middleware import CorrelationIDMiddleware

logger = create_service_logger("gas_proxy.app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log the forwarding target and close the DI container on shutdown."""
    settings: ProxySettings = app.state.settings
    logger.info(
        "GAS proxy listening",
        extra={"port": settings.PORT, "gas_url": settings.GAS_URL},
    )
    yield
    logger.info("Shutting down GAS proxy...")
    await app.state.di_container.close()


def create_app(settings: ProxySettings) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.SERVICE_NAME,
        version=SERVICE_VERSION,
        description="Reverse proxy for the Apps Script backend and GitHub image storage",
        docs_url="/docs" if settings.is_development() else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development() else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_fastapi_error_handlers(app)

    app.add_middleware(CorrelationIDMiddleware)

    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )

    app.include_router(health_router)
    app.include_router(static_router)
    app.include_router(proxy_router)

    container = make_async_container(
        GasProxyProvider(settings),
        RequestContextProvider(),
        FastapiProvider(),
    )
    setup_dishka(container, app)
    app.state.di_container = container

    return app


def load_runtime_settings() -> ProxySettings:
    """Load settings, configure logging and report missing configuration.

    Exits the process with status 1 when the settings are invalid (GAS_URL
    missing). Warns when image uploads are not configured.
    """
    try:
        settings = load_settings()
    except ValidationError as e:
        configure_service_logging("gas-proxy-service")
        logger.critical(
            "FATAL ERROR: invalid configuration (GAS_URL must be set)",
            extra={
                "error_code": ErrorCode.CONFIGURATION_ERROR.value,
                "errors": e.errors(include_url=False),
            },
        )
        sys.exit(1)

    configure_service_logging(
        settings.SERVICE_NAME,
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
    )

    if not settings.upload_configured:
        logger.warning(
            "GitHub environment variables (GITHUB_API_TOKEN, GITHUB_OWNER, GITHUB_REPO) "
            "are not set. Image uploads will fail."
        )

    return settings


def create_app_from_env() -> FastAPI:
    """Application factory for ``uvicorn --factory``."""
    return create_app(load_runtime_settings())


def main() -> None:
    """Validate configuration, configure logging and run the server."""
    import uvicorn

    settings = load_runtime_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
