"""GAS Proxy Service middleware components."""

from __future__ import annotations

from uuid import UUID, uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from structlog.contextvars import bound_contextvars

CORRELATION_HEADER = "X-Correlation-ID"


def _parse_correlation_id(raw: str | None) -> UUID:
    if raw:
        try:
            return UUID(raw)
        except ValueError:
            pass
    return uuid4()


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Give every request a correlation ID and echo it on the response.

    The ID is stored on ``request.state`` for DI and bound into the structlog
    context so every log line of the request carries it.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = _parse_correlation_id(request.headers.get(CORRELATION_HEADER))
        request.state.correlation_id = correlation_id

        with bound_contextvars(correlation_id=str(correlation_id)):
            response = await call_next(request)

        response.headers[CORRELATION_HEADER] = str(correlation_id)
        return response
