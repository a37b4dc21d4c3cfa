"""Internal result and failure types shared by clients and routes.

Failures are frozen dataclasses returned inside ``Result.err`` so routes can
branch on the concrete type instead of catching exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, Union

JsonValue: TypeAlias = Union[
    dict[str, "JsonValue"], list["JsonValue"], str, int, float, bool, None
]


# --- Upstream action endpoint ---


@dataclass(frozen=True)
class UpstreamMalformedResponse:
    """Upstream answered with a body that is not JSON."""

    status_code: int
    snippet: str  # First 500 characters of the raw body


@dataclass(frozen=True)
class UpstreamFailure:
    """Upstream answered with JSON and a non-2xx status."""

    status_code: int
    body: JsonValue


@dataclass(frozen=True)
class UpstreamTransportError:
    """The request never produced a response (DNS, refused, timeout)."""

    message: str


UpstreamError: TypeAlias = Union[
    UpstreamMalformedResponse, UpstreamFailure, UpstreamTransportError
]


# --- Asset host ---


@dataclass(frozen=True)
class UploadedAsset:
    url: str
    path: str


@dataclass(frozen=True)
class UploadNotConfigured:
    """GitHub token, owner or repository is missing."""


@dataclass(frozen=True)
class UploadInvalidInput:
    message: str


@dataclass(frozen=True)
class UploadRemoteFailure:
    """Asset host rejected the upload or returned no download URL."""

    status_code: int
    message: str | None = None


@dataclass(frozen=True)
class UploadTransportError:
    message: str


UploadError: TypeAlias = Union[
    UploadNotConfigured, UploadInvalidInput, UploadRemoteFailure, UploadTransportError
]
