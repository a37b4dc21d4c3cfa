"""Shared fixtures for GAS Proxy Service tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from services.gas_proxy_service.app import create_app
from services.gas_proxy_service.config import ProxySettings
from services.gas_proxy_service.tests.test_provider import make_settings


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """Directory holding the three static files served by the proxy."""
    (tmp_path / "index.html").write_text("<html><body>shell</body></html>", encoding="utf-8")
    (tmp_path / "tools.json").write_text('{"tools": ["calculator"]}', encoding="utf-8")
    (tmp_path / "generator.json").write_text('{"templates": []}', encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(static_dir: Path) -> ProxySettings:
    return make_settings(STATIC_DIR=static_dir)


@pytest.fixture
async def client(settings: ProxySettings) -> AsyncIterator[AsyncClient]:
    """Test client against the fully wired application."""
    app = create_app(settings)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    await app.state.di_container.close()
