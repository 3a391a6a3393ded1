"""Typesense tenant configuration stored in Saleor private metadata.

The configuration is kept as one JSON document under the domain scoped key
``app-config__<saleorApiUrl>``::

    {
        "appConfig": {"host": "...", "apiKey": "...", "protocol": "https",
                      "port": 443, "connectionTimeoutSeconds": 5},
        "fieldsMapping": {"enabledTypesenseFields": ["id", "productName"]}
    }
"""

from __future__ import annotations

from typing import Literal

import orjson
from loguru import logger
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from src.core.exceptions import ConfigurationError
from src.infrastructure.saleor.models import SaleorModel
from src.infrastructure.saleor.settings_manager import MetadataSettingsManager

APP_CONFIG_KEY = "app-config"


class TypesenseConnectionConfig(SaleorModel):
    host: str = Field(..., min_length=1)
    api_key: str = Field(..., min_length=1)
    protocol: Literal["http", "https"] = "https"
    port: int = 443
    connection_timeout_seconds: float = 5.0


class FieldsMapping(SaleorModel):
    enabled_typesense_fields: list[str] = Field(default_factory=list)


class TypesenseAppConfig(SaleorModel):
    """Configuration of one tenant; ``app_config`` is None until set up."""

    app_config: TypesenseConnectionConfig | None = None
    fields_mapping: FieldsMapping = Field(default_factory=FieldsMapping)


class AppConfigMetadataManager:
    """Loads ``TypesenseAppConfig`` through a metadata settings manager.

    Args:
        settings_manager: Manager bound to the tenant's GraphQL client.
    """

    def __init__(self, settings_manager: MetadataSettingsManager) -> None:
        self._settings_manager = settings_manager

    async def get(self, saleor_api_url: str) -> TypesenseAppConfig:
        """Return the tenant configuration, empty when nothing is stored.

        Raises:
            ConfigurationError: When the stored document cannot be parsed.
        """
        raw = await self._settings_manager.get(APP_CONFIG_KEY, domain=saleor_api_url)
        if raw is None:
            logger.debug("No Typesense configuration stored")
            return TypesenseAppConfig()

        try:
            return TypesenseAppConfig.model_validate(orjson.loads(raw))
        except (orjson.JSONDecodeError, PydanticValidationError) as exc:
            raise ConfigurationError(
                "Stored Typesense configuration is malformed",
                context={"saleor_api_url": saleor_api_url},
                cause=exc,
            ) from exc
