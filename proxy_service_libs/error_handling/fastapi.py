"""FastAPI exception handlers producing the proxy's response shapes."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from proxy_service_libs.error_enums import ErrorCode
from proxy_service_libs.error_handling.envelope import ErrorEnvelope
from proxy_service_libs.error_handling.proxy_error import ProxyServiceError
from proxy_service_libs.logging_utils import create_service_logger

logger = create_service_logger("error_handling.fastapi")

NOT_FOUND_MESSAGE = "Resource not found on proxy."


def register_error_handlers(app: FastAPI) -> None:
    """Register envelope and plain-text handlers on a FastAPI app."""

    @app.exception_handler(ProxyServiceError)
    async def handle_proxy_error(request: Request, exc: ProxyServiceError) -> JSONResponse:
        detail = exc.error_detail
        logger.warning(
            "Request rejected",
            extra={
                "error_code": detail.error_code.value,
                "error_message": detail.message,
                "operation": detail.operation,
                "path": request.url.path,
                "correlation_id": exc.correlation_id,
            },
        )
        return JSONResponse(
            status_code=detail.status_code,
            content=ErrorEnvelope(error=detail.message).to_content(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        # Wrong-method hits on known paths are unknown resources as far as clients care
        if exc.status_code in (404, 405):
            logger.debug(
                "Unknown route",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "error_code": ErrorCode.RESOURCE_NOT_FOUND.value,
                },
            )
            return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=ErrorEnvelope(error="Invalid request", details=str(exc.errors())).to_content(),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error",
            extra={
                "path": request.url.path,
                "error": str(exc),
                "error_code": ErrorCode.UNKNOWN_ERROR.value,
            },
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=ErrorEnvelope(error="Internal proxy error").to_content(),
        )
