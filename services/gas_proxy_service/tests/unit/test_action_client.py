"""Unit tests for the upstream action client."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from uuid import uuid4

import httpx
import pytest
from respx import MockRouter

from services.gas_proxy_service.clients.action_client import UpstreamActionClientImpl
from services.gas_proxy_service.models_api import (
    UpstreamFailure,
    UpstreamMalformedResponse,
    UpstreamTransportError,
)
from services.gas_proxy_service.tests.test_provider import GAS_URL, make_settings

CORRELATION_ID = uuid4()


@pytest.fixture
async def action_client() -> AsyncIterator[UpstreamActionClientImpl]:
    """Create action client with real httpx client for respx mocking."""
    async with httpx.AsyncClient() as http_client:
        yield UpstreamActionClientImpl(http_client, make_settings())


@pytest.mark.asyncio
async def test_send_returns_parsed_body(
    action_client: UpstreamActionClientImpl, respx_mock: MockRouter
) -> None:
    """Test successful action returns the upstream JSON unchanged."""
    respx_mock.post(GAS_URL).mock(
        return_value=httpx.Response(200, json={"success": True, "data": {"rows": [1, 2]}})
    )

    result = await action_client.send("getRows", {"sheet": "Members"}, CORRELATION_ID)

    assert result.is_ok
    assert result.value == {"success": True, "data": {"rows": [1, 2]}}


@pytest.mark.asyncio
async def test_send_merges_action_into_json_body(
    action_client: UpstreamActionClientImpl, respx_mock: MockRouter
) -> None:
    """Test request body is the action followed by the caller payload."""
    route = respx_mock.post(GAS_URL).mock(return_value=httpx.Response(200, json={}))

    await action_client.send("saveMember", {"name": "Asha", "age": 31}, CORRELATION_ID)

    request = route.calls[0].request
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == {"action": "saveMember", "name": "Asha", "age": 31}


@pytest.mark.asyncio
async def test_send_non_json_body_is_malformed_with_snippet(
    action_client: UpstreamActionClientImpl, respx_mock: MockRouter
) -> None:
    """Test non-JSON reply yields MalformedResponse with a 500 char snippet."""
    raw_body = "<html>" + "x" * 1000
    respx_mock.post(GAS_URL).mock(return_value=httpx.Response(200, text=raw_body))

    result = await action_client.send("getRows", {}, CORRELATION_ID)

    assert result.is_err
    error = result.error
    assert isinstance(error, UpstreamMalformedResponse)
    assert error.status_code == 200
    assert error.snippet == raw_body[:500]


@pytest.mark.asyncio
async def test_send_non_json_error_status_is_still_malformed(
    action_client: UpstreamActionClientImpl, respx_mock: MockRouter
) -> None:
    """Test parse failure is reported before the HTTP status is considered."""
    respx_mock.post(GAS_URL).mock(return_value=httpx.Response(503, text="not json"))

    result = await action_client.send("anything", {}, CORRELATION_ID)

    assert isinstance(result.error, UpstreamMalformedResponse)
    assert result.error.status_code == 503
    assert result.error.snippet == "not json"


@pytest.mark.asyncio
async def test_send_json_error_status_is_upstream_failure(
    action_client: UpstreamActionClientImpl, respx_mock: MockRouter
) -> None:
    """Test JSON reply with non-2xx status carries status and parsed body."""
    respx_mock.post(GAS_URL).mock(
        return_value=httpx.Response(403, json={"success": False, "error": "Denied"})
    )

    result = await action_client.send("deleteMember", {"id": 7}, CORRELATION_ID)

    assert result.is_err
    assert result.error == UpstreamFailure(403, {"success": False, "error": "Denied"})


@pytest.mark.asyncio
async def test_send_connection_error_is_transport_error(
    action_client: UpstreamActionClientImpl, respx_mock: MockRouter
) -> None:
    """Test network-level failures are returned, not raised."""
    respx_mock.post(GAS_URL).mock(side_effect=httpx.ConnectError("Connection refused"))

    result = await action_client.send("getRows", {}, CORRELATION_ID)

    assert result.is_err
    assert result.error == UpstreamTransportError("Connection refused")


@pytest.mark.asyncio
async def test_send_timeout_is_transport_error(
    action_client: UpstreamActionClientImpl, respx_mock: MockRouter
) -> None:
    """Test timeouts without a message still produce a readable error."""
    respx_mock.post(GAS_URL).mock(side_effect=httpx.ReadTimeout(""))

    result = await action_client.send("getRows", {}, CORRELATION_ID)

    assert isinstance(result.error, UpstreamTransportError)
    assert result.error.message == "ReadTimeout"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "raw_body",
    ["NaN", "Infinity", "-Infinity", '{"success": true, "data": {"score": NaN}}'],
)
async def test_send_non_standard_json_constants_are_malformed(
    action_client: UpstreamActionClientImpl, respx_mock: MockRouter, raw_body: str
) -> None:
    """Test NaN and Infinity literals are rejected like any other invalid JSON."""
    respx_mock.post(GAS_URL).mock(return_value=httpx.Response(200, text=raw_body))

    result = await action_client.send("anything", {}, CORRELATION_ID)

    assert result.error == UpstreamMalformedResponse(status_code=200, snippet=raw_body)
