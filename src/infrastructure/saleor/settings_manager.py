"""Read access to settings stored in app private metadata."""

from __future__ import annotations

from typing import Protocol

from src.infrastructure.saleor.models import MetadataItem


class MetadataSource(Protocol):
    """Anything able to fetch the app's private metadata."""

    async def fetch_app_private_metadata(self) -> list[MetadataItem]: ...


class MetadataSettingsManager:
    """Key lookup over private metadata with optional domain scoping.

    Domain scoped keys are stored as ``<key>__<domain>``; the domain is the
    Saleor API URL, so one app installation can hold settings for several
    instances. Metadata is fetched at most once per manager.

    Args:
        source: Client used to fetch metadata.
    """

    def __init__(self, source: MetadataSource) -> None:
        self._source = source
        self._items: list[MetadataItem] | None = None

    async def _load(self) -> list[MetadataItem]:
        if self._items is None:
            self._items = await self._source.fetch_app_private_metadata()
        return self._items

    async def get(self, key: str, domain: str | None = None) -> str | None:
        """Return the raw value of ``key`` (scoped to ``domain`` when given)."""
        lookup = f"{key}__{domain}" if domain else key
        for item in await self._load():
            if item.key == lookup:
                return item.value
        return None
