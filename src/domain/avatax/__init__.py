"""AvaTax app: checkout tax calculation."""

from src.domain.avatax.calculate_taxes import (
    CalculateTaxesError,
    CalculateTaxesUseCase,
    ConfigBrokenError,
    ExpectedIncompletePayloadError,
    FailedCalculatingTaxesError,
    TaxError,
    UnhandledError,
)
from src.domain.avatax.config_extractor import (
    AppConfigExtractor,
    ConfigError,
    LogConfigurationMetricError,
    MalformedConfigError,
    MissingMetadataError,
)
from src.domain.avatax.configuration_logger import AppConfigurationLogger
from src.domain.avatax.metadata_cache import MetadataCache
from src.domain.avatax.payload import CalculateTaxesPayload
from src.domain.avatax.response_mapper import TaxComputation
from src.domain.avatax.subscription_errors import SubscriptionPayloadErrorChecker
from src.domain.avatax.tax_errors import AvataxInvalidAddressError

__all__ = [
    "AppConfigExtractor",
    "AppConfigurationLogger",
    "AvataxInvalidAddressError",
    "CalculateTaxesError",
    "CalculateTaxesPayload",
    "CalculateTaxesUseCase",
    "ConfigBrokenError",
    "ConfigError",
    "ExpectedIncompletePayloadError",
    "FailedCalculatingTaxesError",
    "LogConfigurationMetricError",
    "MalformedConfigError",
    "MetadataCache",
    "MissingMetadataError",
    "SubscriptionPayloadErrorChecker",
    "TaxComputation",
    "TaxError",
    "UnhandledError",
]
