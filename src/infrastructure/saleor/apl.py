"""File based auth persistence layer (APL).

Each Saleor instance that installed an app is a tenant. Its auth data
(API URL, app token, app id) is stored in a JSON file as a list of
entries::

    [{"saleorApiUrl": "https://shop.example/graphql/", "token": "...", "appId": "QXBw..."}]

Installation itself is performed by the platform SDK; this layer only reads
and writes the stored entries.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import orjson
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from src.core.exceptions import ConfigurationError
from src.infrastructure.saleor.models import AuthData


class FileAPL:
    """Auth data stored in a local JSON file, keyed by Saleor API URL.

    Args:
        path: Location of the JSON file. A missing file means no tenants.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = asyncio.Lock()

    def _read(self) -> list[AuthData]:
        if not self.path.exists():
            return []
        try:
            raw = orjson.loads(self.path.read_bytes())
            entries = raw if isinstance(raw, list) else [raw]
            return [AuthData.model_validate(entry) for entry in entries]
        except (orjson.JSONDecodeError, PydanticValidationError) as exc:
            raise ConfigurationError(
                "Auth data file is malformed",
                context={"path": str(self.path)},
                cause=exc,
            ) from exc

    def _write(self, entries: list[AuthData]) -> None:
        payload = [entry.model_dump(by_alias=True) for entry in entries]
        self.path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))

    async def get(self, saleor_api_url: str) -> AuthData | None:
        """Get auth data of a tenant.

        Args:
            saleor_api_url: GraphQL endpoint of the tenant.

        Returns:
            AuthData | None: Stored auth data, None for unknown tenants.
        """
        for entry in await asyncio.to_thread(self._read):
            if entry.saleor_api_url == saleor_api_url:
                return entry
        return None

    async def set(self, auth_data: AuthData) -> None:
        """Store or replace auth data of a tenant."""
        async with self._lock:
            entries = [
                entry
                for entry in await asyncio.to_thread(self._read)
                if entry.saleor_api_url != auth_data.saleor_api_url
            ]
            entries.append(auth_data)
            await asyncio.to_thread(self._write, entries)
        logger.info("Stored auth data", saleor_api_url=auth_data.saleor_api_url)
