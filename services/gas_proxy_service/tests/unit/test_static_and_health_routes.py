"""Route tests for static files and health endpoints."""

from __future__ import annotations

from pathlib import Path

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_index_served(client: AsyncClient) -> None:
    response = await client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert response.text == "<html><body>shell</body></html>"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("path", "expected"),
    [("/tools.json", {"tools": ["calculator"]}), ("/generator.json", {"templates": []})],
)
async def test_config_files_served(client: AsyncClient, path: str, expected: dict) -> None:
    response = await client.get(path)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == expected


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("file_name", "path", "message"),
    [
        ("tools.json", "/tools.json", "Error loading tools configuration."),
        ("generator.json", "/generator.json", "Error loading generator configuration."),
    ],
)
async def test_missing_config_file_is_404(
    client: AsyncClient, static_dir: Path, file_name: str, path: str, message: str
) -> None:
    (static_dir / file_name).unlink()

    response = await client.get(path)

    assert response.status_code == 404
    assert response.text == message


@pytest.mark.asyncio
async def test_missing_index_is_500(client: AsyncClient, static_dir: Path) -> None:
    """Test a missing application shell is a server error, not a 404."""
    (static_dir / "index.html").unlink()

    response = await client.get("/")

    assert response.status_code == 500
    assert response.text == "Error loading application shell."


@pytest.mark.asyncio
async def test_directory_in_place_of_config_file_is_404(client: AsyncClient, static_dir: Path) -> None:
    (static_dir / "tools.json").unlink()
    (static_dir / "tools.json").mkdir()

    response = await client.get("/tools.json")

    assert response.status_code == 404
    assert response.text == "Error loading tools configuration."


@pytest.mark.asyncio
async def test_health_is_plain_ok(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.text == "OK"


@pytest.mark.asyncio
async def test_healthz_healthy(client: AsyncClient) -> None:
    response = await client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "gas-proxy-service"
    assert data["status"] == "healthy"
    assert all(data["checks"].values())
    assert data["dependencies"]["asset_host"]["status"] == "configured"


@pytest.mark.asyncio
async def test_healthz_degraded_when_static_file_missing(
    client: AsyncClient, static_dir: Path
) -> None:
    (static_dir / "generator.json").unlink()

    response = await client.get("/healthz")

    data = response.json()
    assert data["status"] == "degraded"
    assert data["checks"]["generator_config_exists"] is False
    assert data["checks"]["index_exists"] is True
