"""Proxy routes forwarding browser requests to the upstream services.

``/login`` and ``/api/{action}`` translate to the upstream action protocol;
``/upload-image`` stores images on the asset host. Every failure leaves here
as a ``{success: false, error, details?}`` envelope.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from proxy_service_libs.error_enums import ErrorCode
from proxy_service_libs.error_handling import raise_client_input_error
from proxy_service_libs.logging_utils import create_service_logger

from services.gas_proxy_service.api._utils import SERVICE, error_response, read_json_object
from services.gas_proxy_service.config import ProxySettings
from services.gas_proxy_service.dto.proxy_v1 import UploadImageResponseV1
from services.gas_proxy_service.models_api import (
    JsonValue,
    UploadError,
    UploadInvalidInput,
    UploadNotConfigured,
    UploadRemoteFailure,
    UpstreamError,
    UpstreamFailure,
    UpstreamMalformedResponse,
)
from services.gas_proxy_service.protocols import (
    AssetUploaderProtocol,
    MediaResolverProtocol,
    UpstreamActionClientProtocol,
)

router = APIRouter()
logger = create_service_logger("gas_proxy.proxy_routes")

# Upstream error bodies replaced by a synthesized envelope; [] and {} are forwarded
_ABSENT_ERROR_BODIES: tuple[JsonValue, ...] = (None, False, 0, "")


def upstream_error_response(error: UpstreamError, action: str | None = None) -> JSONResponse:
    """Map an action client failure to the envelope and HTTP status.

    Args:
        error: Failure returned by the action client
        action: Action name for messages; None for the login route
    """
    for_action = f" for action {action}" if action else ""

    if isinstance(error, UpstreamMalformedResponse):
        return error_response(
            500,
            f"Upstream returned non-JSON response{for_action}. Status: {error.status_code}",
        )

    if isinstance(error, UpstreamFailure):
        status_code = error.status_code or 502
        if error.body in _ABSENT_ERROR_BODIES:
            target = f" for {action}" if action else ""
            return error_response(status_code, f"Upstream error{target}: {error.status_code}")
        return JSONResponse(status_code=status_code, content=error.body)

    return error_response(500, _proxy_error_message(action), details=error.message)


def _proxy_error_message(action: str | None) -> str:
    if action is None:
        return "Proxy server error during login."
    return f"Proxy server error during action: {action}."


@router.post("/login")
@inject
async def login(
    request: Request,
    action_client: FromDishka[UpstreamActionClientProtocol],
    correlation_id: FromDishka[UUID],
) -> JSONResponse:
    """Forward credentials to the upstream ``login`` action.

    The upstream body is returned verbatim; no media resolution is applied.
    """
    body = await read_json_object(request, operation="login", correlation_id=correlation_id)
    mobile = body.get("mobile")
    password = body.get("password")
    if not mobile or not password:
        raise_client_input_error(
            service=SERVICE,
            operation="login",
            message="Mobile and password required",
            correlation_id=correlation_id,
        )

    try:
        result = await action_client.send(
            "login", {"mobile": mobile, "password": password}, correlation_id
        )
    except Exception as e:
        logger.error(
            "Login proxy error",
            extra={"error": str(e), "correlation_id": str(correlation_id)},
            exc_info=True,
        )
        return error_response(500, _proxy_error_message(None), details=str(e))

    if result.is_err:
        return upstream_error_response(result.error)

    return JSONResponse(status_code=200, content=result.value)


@router.post("/api/{action}")
@inject
async def forward_action(
    action: str,
    request: Request,
    action_client: FromDishka[UpstreamActionClientProtocol],
    media_resolver: FromDishka[MediaResolverProtocol],
    settings: FromDishka[ProxySettings],
    correlation_id: FromDishka[UUID],
) -> JSONResponse:
    """Forward an arbitrary action and inline PhotoURL images in its data."""
    payload: dict[str, Any] = await read_json_object(
        request, operation=f"action:{action}", correlation_id=correlation_id
    )

    try:
        result = await action_client.send(action, payload, correlation_id)
        if result.is_err:
            return upstream_error_response(result.error, action=action)

        body = result.value
        if (
            settings.RESOLVE_MEDIA_IN_API_RESPONSES
            and isinstance(body, dict)
            and body.get("success") is True
            and body.get("data") is not None
        ):
            await media_resolver.resolve(body["data"], correlation_id)
    except Exception as e:
        logger.error(
            "API proxy error",
            extra={"action": action, "error": str(e), "correlation_id": str(correlation_id)},
            exc_info=True,
        )
        return error_response(500, _proxy_error_message(action), details=str(e))

    return JSONResponse(status_code=200, content=body)


def upload_error_response(error: UploadError) -> JSONResponse:
    """Map an asset uploader failure to the envelope and HTTP status."""
    if isinstance(error, UploadNotConfigured):
        return error_response(500, "GitHub integration is not configured on the server.")
    if isinstance(error, UploadInvalidInput):
        return error_response(400, error.message)
    if isinstance(error, UploadRemoteFailure):
        return error_response(
            error.status_code or 502,
            f"GitHub API Error: {error.message or 'Failed to upload file.'}",
        )
    return error_response(500, "Server error during image upload.", details=error.message)


@router.post("/upload-image")
@inject
async def upload_image(
    request: Request,
    uploader: FromDishka[AssetUploaderProtocol],
    correlation_id: FromDishka[UUID],
) -> JSONResponse:
    """Store a base64 image on the asset host and return its public URL."""
    if not uploader.is_configured:
        logger.warning(
            "Image upload rejected, GitHub integration is not configured",
            extra={
                "error_code": ErrorCode.UPLOAD_NOT_CONFIGURED.value,
                "correlation_id": str(correlation_id),
            },
        )
        return upload_error_response(UploadNotConfigured())

    body = await read_json_object(request, operation="upload_image", correlation_id=correlation_id)
    image = body.get("image")
    file_name = body.get("fileName")
    if not isinstance(image, str) or not isinstance(file_name, str):
        return upload_error_response(UploadInvalidInput("Image data and file name are required."))

    try:
        result = await uploader.upload(image, file_name, correlation_id)
    except Exception as e:
        logger.error(
            "Proxy error during image upload",
            extra={"error": str(e), "correlation_id": str(correlation_id)},
            exc_info=True,
        )
        return error_response(500, "Server error during image upload.", details=str(e))

    if result.is_err:
        return upload_error_response(result.error)

    return JSONResponse(
        status_code=200,
        content=UploadImageResponseV1(url=result.value.url).model_dump(),
    )
