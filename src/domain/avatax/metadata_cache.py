"""Per-request cache of the app's private metadata.

The webhook payload already carries the app's private metadata. The handler
stores it here before invoking the use case, so configuration lookups
further down the chain do not have to query Saleor again. A cache instance
lives for exactly one request and is passed explicitly.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence

from loguru import logger

from src.infrastructure.saleor.models import MetadataItem


class MetadataCache:
    """Holds private metadata for the duration of one request."""

    def __init__(self) -> None:
        self._metadata: list[MetadataItem] | None = None

    def set_metadata(self, metadata: Sequence[MetadataItem]) -> None:
        self._metadata = list(metadata)

    def get_metadata(self) -> list[MetadataItem] | None:
        return self._metadata

    async def resolve(
        self, fetch: Callable[[], Awaitable[list[MetadataItem]]]
    ) -> list[MetadataItem]:
        """Return cached metadata, fetching and storing it on a miss.

        Args:
            fetch: Loads metadata from Saleor; awaited at most once.
        """
        if self._metadata is None:
            logger.debug("Metadata cache miss, fetching from Saleor")
            self._metadata = await fetch()
        return self._metadata
