"""Health routes for the GAS Proxy Service."""

from __future__ import annotations

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from services.gas_proxy_service.config import ProxySettings

router = APIRouter()

SERVICE_VERSION = "0.1.0"


@router.get("/health", tags=["Health"], response_class=PlainTextResponse)
async def health() -> str:
    """Liveness probe: always ``OK``, no upstream interaction."""
    return "OK"


@router.get("/healthz", tags=["Health"])
@inject
async def health_check(settings: FromDishka[ProxySettings]) -> dict[str, str | dict]:
    """Detailed health: static files present and upload configuration."""
    checks = {
        "index_exists": (settings.STATIC_DIR / "index.html").is_file(),
        "tools_config_exists": (settings.STATIC_DIR / "tools.json").is_file(),
        "generator_config_exists": (settings.STATIC_DIR / "generator.json").is_file(),
        "upload_configured": settings.upload_configured,
    }

    # Upstream URL is required at startup, so only optional pieces can degrade
    overall_status = "healthy" if all(checks.values()) else "degraded"

    return {
        "service": settings.SERVICE_NAME,
        "status": overall_status,
        "message": f"GAS Proxy Service is {overall_status}",
        "version": SERVICE_VERSION,
        "checks": checks,
        "dependencies": {
            "upstream": {
                "status": "configured",
                "media_resolution": "enabled"
                if settings.RESOLVE_MEDIA_IN_API_RESPONSES
                else "disabled",
            },
            "asset_host": {
                "status": "configured" if settings.upload_configured else "disabled",
                "note": "Set GITHUB_API_TOKEN, GITHUB_OWNER and GITHUB_REPO to enable uploads"
                if not settings.upload_configured
                else "Uploads enabled",
            },
        },
    }
