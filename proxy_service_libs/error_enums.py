"""
proxy_service_libs.error_enums - Centralized error code definitions.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    CLIENT_INPUT_ERROR = "CLIENT_INPUT_ERROR"  # Missing/invalid request fields
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Upstream action endpoint
    UPSTREAM_MALFORMED = "UPSTREAM_MALFORMED"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"

    # Asset host
    UPLOAD_NOT_CONFIGURED = "UPLOAD_NOT_CONFIGURED"
    UPLOAD_REMOTE_FAILURE = "UPLOAD_REMOTE_FAILURE"

    # Generic
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    MEDIA_FETCH_FAILURE = "MEDIA_FETCH_FAILURE"  # Logged only, never returned
    STATIC_FILE_ERROR = "STATIC_FILE_ERROR"
