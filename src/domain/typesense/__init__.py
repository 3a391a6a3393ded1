"""Typesense app: webhook status and catalogue import."""

from src.domain.typesense.app_config import (
    AppConfigMetadataManager,
    TypesenseAppConfig,
    TypesenseConnectionConfig,
)
from src.domain.typesense.product_import import ImportProgress, ProductImporter
from src.domain.typesense.webhook_definitions import is_webhook_update_needed
from src.domain.typesense.webhook_toggler import WebhookActivityTogglerService

__all__ = [
    "AppConfigMetadataManager",
    "ImportProgress",
    "ProductImporter",
    "TypesenseAppConfig",
    "TypesenseConnectionConfig",
    "WebhookActivityTogglerService",
    "is_webhook_update_needed",
]
