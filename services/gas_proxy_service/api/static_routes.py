"""Static file routes for the browser application shell and its config files."""

from __future__ import annotations

from pathlib import Path

import aiofiles
from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, Response
from proxy_service_libs.error_enums import ErrorCode
from proxy_service_libs.logging_utils import create_service_logger

from services.gas_proxy_service.config import ProxySettings

router = APIRouter()
logger = create_service_logger("gas_proxy.static_routes")

_MISSING_FILE_ERRORS = (FileNotFoundError, IsADirectoryError, NotADirectoryError)


async def serve_static_file(
    path: Path,
    media_type: str,
    failure_message: str,
    *,
    missing_status: int = 404,
) -> Response:
    """Read a local file and return it, or a plain-text failure.

    Args:
        path: File to serve
        media_type: Content type of the response
        failure_message: Body of the failure response
        missing_status: Status used when the file does not exist; any other
            I/O error answers 500
    """
    try:
        async with aiofiles.open(path, "rb") as static_file:
            content = await static_file.read()
    except OSError as e:
        status_code = missing_status if isinstance(e, _MISSING_FILE_ERRORS) else 500
        logger.error(
            "Error sending static file",
            extra={
                "path": str(path),
                "error": str(e),
                "status_code": status_code,
                "error_code": ErrorCode.STATIC_FILE_ERROR.value,
            },
        )
        return PlainTextResponse(failure_message, status_code=status_code)

    return Response(content=content, media_type=media_type)


@router.get("/", include_in_schema=False, response_model=None)
@inject
async def serve_index(settings: FromDishka[ProxySettings]) -> Response:
    """Serve the application shell."""
    return await serve_static_file(
        settings.STATIC_DIR / "index.html",
        "text/html",
        "Error loading application shell.",
        missing_status=500,
    )


@router.get("/tools.json", include_in_schema=False, response_model=None)
@inject
async def serve_tools(settings: FromDishka[ProxySettings]) -> Response:
    """Serve the tools configuration consumed by the frontend."""
    return await serve_static_file(
        settings.STATIC_DIR / "tools.json",
        "application/json",
        "Error loading tools configuration.",
    )


@router.get("/generator.json", include_in_schema=False, response_model=None)
@inject
async def serve_generator(settings: FromDishka[ProxySettings]) -> Response:
    """Serve the generator configuration consumed by the frontend."""
    return await serve_static_file(
        settings.STATIC_DIR / "generator.json",
        "application/json",
        "Error loading generator configuration.",
    )
