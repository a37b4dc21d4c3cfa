"""Shared utilities for GAS Proxy Service HTTP clients."""

from __future__ import annotations

import httpx

from services.gas_proxy_service.config import ProxySettings

UPSTREAM_SNIPPET_LENGTH = 500


def build_upstream_headers() -> dict[str, str]:
    """Headers for the Apps Script action endpoint."""
    return {"Content-Type": "application/json"}


def build_github_headers(settings: ProxySettings) -> dict[str, str]:
    """Build authentication headers for the GitHub contents API.

    Args:
        settings: Settings with a configured GITHUB_API_TOKEN

    Returns:
        Headers dict with token authorization and the v3 media type
    """
    token = settings.GITHUB_API_TOKEN.get_secret_value() if settings.GITHUB_API_TOKEN else ""
    return {
        "Authorization": f"token {token}",
        "Content-Type": "application/json",
        "Accept": "application/vnd.github.v3+json",
    }


def describe_transport_error(error: httpx.HTTPError | httpx.InvalidURL) -> str:
    """Readable message for an httpx error; some timeouts stringify to ''."""
    return str(error) or type(error).__name__
