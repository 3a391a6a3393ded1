"""Shared fixtures for integration tests.

The application is built with ``create_app`` and wired to:

- a file APL in a temporary directory holding one registered tenant
- settings with a webhook secret, so signatures are always verified
- an ``httpx.MockTransport`` standing in for Saleor, AvaTax and Typesense
"""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.api.dependencies import get_apl
from src.api.main import create_app
from src.core.config import (
    LogConfig,
    ObservabilityConfig,
    SaleorConfig,
    Settings,
    get_settings,
)
from src.core.context import RequestContext
from src.infrastructure.http import get_http_client
from src.infrastructure.saleor import FileAPL
from tests.fixtures.saleor_payloads import WEBHOOK_SECRET, auth_data
from tests.fixtures.upstream import Upstream


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Start every test from freshly loaded settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_request_context() -> Generator[None]:
    """Prevent correlation IDs and tenants from leaking between tests."""
    RequestContext.clear()
    yield
    RequestContext.clear()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        environment="development",
        debug=False,
        log_config=LogConfig(log_level="WARNING"),
        observability_config=ObservabilityConfig(enable_tracing=False),
        saleor_config=SaleorConfig(
            webhook_secret=WEBHOOK_SECRET, apl_file_path=tmp_path / "auth.json"
        ),
    )


@pytest.fixture
async def apl(settings: Settings) -> FileAPL:
    """APL with the test tenant installed."""
    file_apl = FileAPL(settings.saleor_config.apl_file_path)
    await file_apl.set(auth_data())
    return file_apl


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
async def upstream_client(upstream: Upstream) -> AsyncGenerator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as client:
        yield client


@pytest.fixture
def app(settings: Settings, apl: FileAPL, upstream_client: httpx.AsyncClient) -> FastAPI:
    """Application with settings, APL and outbound HTTP overridden."""
    application = create_app(settings)
    application.dependency_overrides[get_settings] = lambda: settings
    application.dependency_overrides[get_apl] = lambda: apl
    application.dependency_overrides[get_http_client] = lambda: upstream_client
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def lenient_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Client that returns 500 responses instead of re-raising app exceptions."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

