"""Extraction of the AvaTax ``AppConfig`` from private metadata."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import orjson
from pydantic import ValidationError as PydanticValidationError

from src.core.result import Err, Ok, Result
from src.domain.avatax.app_config import (
    CHANNEL_CONFIGURATION_KEY,
    PROVIDER_CONNECTIONS_KEY,
    AppConfig,
)
from src.infrastructure.saleor.models import MetadataItem


class ConfigError(Exception):
    """Base class for configuration extraction failures."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class MissingMetadataError(ConfigError):
    """The provider connections entry is absent from metadata."""


class MalformedConfigError(ConfigError):
    """A configuration entry is not valid JSON or does not match the schema."""


class LogConfigurationMetricError(Exception):
    """Logging the configuration summary failed (never fatal)."""


def _decode_list(items: dict[str, str], key: str) -> list[Any]:
    raw = items.get(key)
    if raw is None:
        return []
    value = orjson.loads(raw)
    if not isinstance(value, list):
        raise TypeError(f"Metadata entry {key!r} must hold a JSON list")
    return value


class AppConfigExtractor:
    """Builds ``AppConfig`` values from raw metadata entries."""

    def extract_app_config_from_private_metadata(
        self, metadata: Sequence[MetadataItem]
    ) -> Result[AppConfig, ConfigError]:
        """Parse metadata into an ``AppConfig``.

        Args:
            metadata: Private metadata entries of the app.

        Returns:
            Result[AppConfig, ConfigError]: ``MissingMetadataError`` when
                provider connections are not stored, ``MalformedConfigError``
                when any entry cannot be decoded.
        """
        items = {item.key: item.value for item in metadata}
        if PROVIDER_CONNECTIONS_KEY not in items:
            return Err(
                MissingMetadataError(
                    f"Metadata entry {PROVIDER_CONNECTIONS_KEY!r} is missing"
                )
            )

        try:
            config = AppConfig(
                provider_connections=_decode_list(items, PROVIDER_CONNECTIONS_KEY),
                channels=_decode_list(items, CHANNEL_CONFIGURATION_KEY),
            )
        except (orjson.JSONDecodeError, TypeError, PydanticValidationError) as exc:
            return Err(MalformedConfigError("App configuration is malformed", exc))

        return Ok(config)
