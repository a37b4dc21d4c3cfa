"""GitHub contents API client used as permanent image storage."""

from __future__ import annotations

import re
import time
from uuid import UUID

import httpx
from proxy_service_libs import Result
from proxy_service_libs.error_enums import ErrorCode
from proxy_service_libs.logging_utils import create_service_logger

from services.gas_proxy_service.clients._utils import (
    build_github_headers,
    describe_transport_error,
)
from services.gas_proxy_service.config import ProxySettings
from services.gas_proxy_service.models_api import (
    UploadedAsset,
    UploadError,
    UploadInvalidInput,
    UploadNotConfigured,
    UploadRemoteFailure,
    UploadTransportError,
)

logger = create_service_logger("gas_proxy.asset_uploader")

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9.\-]")


def build_storage_name(file_name: str, now_ms: int | None = None) -> str:
    """Prefix a sanitized file name with a millisecond timestamp.

    Every character outside ``[A-Za-z0-9.-]`` becomes ``_``.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms}-{_UNSAFE_FILENAME_CHARS.sub('_', file_name)}"


class GitHubAssetUploaderImpl:
    """Uploads base64 content to a repository via the contents API."""

    def __init__(self, http_client: httpx.AsyncClient, settings: ProxySettings) -> None:
        """Initialize with shared HTTP client.

        Args:
            http_client: Shared httpx AsyncClient instance
            settings: Service settings providing GitHub coordinates and token
        """
        self._client = http_client
        self._settings = settings

    @property
    def is_configured(self) -> bool:
        return self._settings.upload_configured

    async def upload(
        self,
        base64_content: str,
        file_name: str,
        correlation_id: UUID,
    ) -> Result[UploadedAsset, UploadError]:
        """Create a new file in the asset repository.

        Configuration is checked before the input so an unconfigured server
        reports the same error whatever the request contained.
        """
        if not self.is_configured:
            logger.warning(
                "Image upload attempted without GitHub configuration",
                extra={
                    "error_code": ErrorCode.UPLOAD_NOT_CONFIGURED.value,
                    "correlation_id": str(correlation_id),
                },
            )
            return Result.err(UploadNotConfigured())

        if not base64_content or not file_name:
            return Result.err(UploadInvalidInput("Image data and file name are required."))

        settings = self._settings
        storage_name = build_storage_name(file_name)
        file_path = f"{settings.GITHUB_UPLOAD_DIR.strip('/')}/{storage_name}"
        url = (
            f"{settings.GITHUB_API_URL.rstrip('/')}/repos/"
            f"{settings.GITHUB_OWNER}/{settings.GITHUB_REPO}/contents/{file_path}"
        )
        body = {"message": f"Upload image: {storage_name}", "content": base64_content}
        if settings.GITHUB_BRANCH:
            body["branch"] = settings.GITHUB_BRANCH

        logger.debug(
            "Uploading image to GitHub",
            extra={"path": file_path, "correlation_id": str(correlation_id)},
        )

        try:
            response = await self._client.put(
                url, json=body, headers=build_github_headers(settings)
            )
        except httpx.TransportError as e:
            message = describe_transport_error(e)
            logger.error(
                "GitHub transport error during upload",
                extra={
                    "path": file_path,
                    "error": message,
                    "error_code": ErrorCode.TRANSPORT_ERROR.value,
                    "correlation_id": str(correlation_id),
                },
            )
            return Result.err(UploadTransportError(message))

        try:
            result = response.json()
        except ValueError:
            result = None

        download_url = None
        api_message = None
        if isinstance(result, dict):
            content = result.get("content")
            if isinstance(content, dict):
                download_url = content.get("download_url")
            api_message = result.get("message")

        if response.is_success and download_url:
            logger.info(
                "Uploaded image to GitHub",
                extra={"path": file_path, "correlation_id": str(correlation_id)},
            )
            return Result.ok(UploadedAsset(url=download_url, path=file_path))

        logger.error(
            "GitHub API rejected upload",
            extra={
                "path": file_path,
                "status_code": response.status_code,
                "error": api_message or "Unknown error",
                "error_code": ErrorCode.UPLOAD_REMOTE_FAILURE.value,
                "correlation_id": str(correlation_id),
            },
        )
        return Result.err(
            UploadRemoteFailure(
                status_code=response.status_code,
                message=str(api_message) if api_message else None,
            )
        )
