"""Saleor integration: auth persistence, GraphQL client and metadata access."""

from src.infrastructure.saleor.apl import FileAPL
from src.infrastructure.saleor.graphql_client import SaleorGraphQLClient
from src.infrastructure.saleor.models import AuthData, MetadataItem
from src.infrastructure.saleor.settings_manager import MetadataSettingsManager

__all__ = [
    "AuthData",
    "FileAPL",
    "MetadataItem",
    "MetadataSettingsManager",
    "SaleorGraphQLClient",
]
