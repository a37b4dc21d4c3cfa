"""Error handling utilities for the proxy service."""

from proxy_service_libs.error_handling.envelope import ErrorEnvelope
from proxy_service_libs.error_handling.factories import raise_client_input_error
from proxy_service_libs.error_handling.proxy_error import ErrorDetail, ProxyServiceError

__all__ = [
    "ErrorDetail",
    "ErrorEnvelope",
    "ProxyServiceError",
    "raise_client_input_error",
]
