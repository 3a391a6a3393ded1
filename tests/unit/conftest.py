"""Shared fixtures for unit tests."""

import os
from collections.abc import AsyncGenerator, Generator

import httpx
import pytest
from pytest_mock import MockerFixture, MockType

from src.core.config import LogConfig, Settings, get_settings
from src.core.error_context import _get_sensitive_fields
from tests.fixtures.http import HandlerType, HttpClientFactory


@pytest.fixture(autouse=True)
def clean_lru_cache() -> Generator[None]:
    """Clear cached settings before and after each test."""
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()
    yield
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[pytest.MonkeyPatch]:
    """Remove app-specific environment variables for the duration of a test."""
    original_env = os.environ.copy()

    env_prefixes = [
        "APP_",
        "API_",
        "ENVIRONMENT",
        "DEBUG",
        "LOG_CONFIG__",
        "OBSERVABILITY_CONFIG__",
        "SENTRY_CONFIG__",
        "SALEOR_CONFIG__",
        "AVATAX_CONFIG__",
        "TYPESENSE_CONFIG__",
    ]
    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in env_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield monkeypatch

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Provide real Settings built from test environment variables."""
    monkeypatch.setenv("APP_NAME", "TestApp")
    monkeypatch.setenv("APP_VERSION", "1.0.0")
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("API_HOST", "127.0.0.1")
    monkeypatch.setenv("API_PORT", "3000")
    return Settings()


@pytest.fixture
def mock_get_settings(mocker: MockerFixture) -> MockType:
    """Mock get_settings used by error_context with custom sensitive fields."""
    mock_settings = mocker.Mock(spec=Settings)
    mock_log_config = mocker.Mock(spec=LogConfig)
    mock_log_config.sensitive_fields = ["custom_secret", "my_password", "api_token"]
    mock_settings.log_config = mock_log_config

    mock_get_settings_fn = mocker.patch("src.core.error_context.get_settings")
    mock_get_settings_fn.return_value = mock_settings
    _get_sensitive_fields.cache_clear()
    return mock_get_settings_fn


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """Requests seen by ``mock_http_client``."""
    return []


@pytest.fixture
async def mock_http_client(
    recorded_requests: list[httpx.Request],
) -> AsyncGenerator[HttpClientFactory]:
    """Factory of ``httpx.AsyncClient`` instances answering from a handler.

    Usage:
        client = mock_http_client(lambda request: httpx.Response(200, json={}))
    """
    clients: list[httpx.AsyncClient] = []

    def _create(handler: HandlerType) -> httpx.AsyncClient:
        def _record(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
        clients.append(client)
        return client

    yield _create

    for client in clients:
        await client.aclose()
