"""Shared HTTP client lifecycle.

One ``httpx.AsyncClient`` is shared by all outbound integrations so that
connections to Saleor, AvaTax and Typesense are pooled. Per-call timeouts
are passed by each client; the pool itself is created lazily and closed
during application shutdown.
"""

import threading

import httpx
from loguru import logger

from src.infrastructure.constants import (
    HTTP_DEFAULT_TIMEOUT_SECONDS,
    HTTP_MAX_CONNECTIONS,
    HTTP_MAX_KEEPALIVE_CONNECTIONS,
)


def create_http_client() -> httpx.AsyncClient:
    """Create an async HTTP client with the service's pool limits."""
    client = httpx.AsyncClient(
        timeout=HTTP_DEFAULT_TIMEOUT_SECONDS,
        limits=httpx.Limits(
            max_connections=HTTP_MAX_CONNECTIONS,
            max_keepalive_connections=HTTP_MAX_KEEPALIVE_CONNECTIONS,
        ),
        follow_redirects=False,
    )
    logger.info(
        "Created shared HTTP client - max_connections: {}, keepalive: {}",
        HTTP_MAX_CONNECTIONS,
        HTTP_MAX_KEEPALIVE_CONNECTIONS,
    )
    return client


class _HttpClientManager:
    """Holds the process-wide HTTP client without module-level globals."""

    def __init__(self) -> None:
        self._client: httpx.AsyncClient | None = None
        self._lock = threading.Lock()

    def get_client(self) -> httpx.AsyncClient:
        """Get or create the shared client."""
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = create_http_client()
        return self._client

    async def close(self) -> None:
        """Close the shared client and its connections."""
        if self._client is not None:
            await self._client.aclose()
            logger.info("Shared HTTP client closed")
            self._client = None


_http_manager = _HttpClientManager()


def get_http_client() -> httpx.AsyncClient:
    """Get the shared HTTP client (FastAPI dependency)."""
    return _http_manager.get_client()


async def close_http_client() -> None:
    """Close the shared HTTP client during application shutdown."""
    await _http_manager.close()
