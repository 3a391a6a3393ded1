"""Checkout tax calculation use case.

Given a verified payload and the tenant's auth data, resolve the AvaTax
configuration for the checkout's channel, ask AvaTax to compute the
transaction and translate the result into Saleor's response shape.

Every failure the flow anticipates is returned as one of the four
``TaxError`` variants. ``AvataxInvalidAddressError`` is the one exception
allowed to escape: it describes a broken ship-from address in the app
configuration and is answered separately by the webhook handler.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol

from loguru import logger

from src.core.observability import trace_operation
from src.core.result import Err, Ok, Result
from src.domain.avatax.app_config import AvataxConnectionConfig
from src.domain.avatax.config_extractor import AppConfigExtractor
from src.domain.avatax.metadata_cache import MetadataCache
from src.domain.avatax.payload import CalculateTaxesPayload
from src.domain.avatax.response_mapper import TaxComputation, build_response
from src.domain.avatax.tax_errors import (
    CREDENTIAL_REJECTION_STATUSES,
    KNOWN_AVATAX_ERROR_CODES,
)
from src.domain.avatax.transaction_builder import AvataxTransactionBuilder
from src.infrastructure.avatax import AvataxApiError, AvataxTransaction
from src.infrastructure.saleor.models import AuthData, MetadataItem


class CalculateTaxesError(Exception):
    """Base class of the use case's error variants.

    Args:
        message: Description of the failure.
        cause: The underlying exception, when there is one.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class ExpectedIncompletePayloadError(CalculateTaxesError):
    """The checkout lacks data needed to compute taxes (address, lines)."""


class ConfigBrokenError(CalculateTaxesError):
    """The tenant configuration is invalid or AvaTax rejected its credentials."""


class FailedCalculatingTaxesError(CalculateTaxesError):
    """AvaTax refused the computation for a known, data related reason."""


class UnhandledError(CalculateTaxesError):
    """Anything the flow did not anticipate."""


type TaxError = (
    ExpectedIncompletePayloadError
    | ConfigBrokenError
    | FailedCalculatingTaxesError
    | UnhandledError
)


class TaxCalculationClient(Protocol):
    async def create_or_adjust_transaction(
        self, model: dict[str, object]
    ) -> AvataxTransaction: ...


type AvataxClientFactory = Callable[[AvataxConnectionConfig], TaxCalculationClient]
type MetadataFetcher = Callable[[AuthData], Awaitable[list[MetadataItem]]]


def find_missing_payload_fields(payload: CalculateTaxesPayload) -> list[str]:
    """List the checkout fields that prevent tax calculation."""
    tax_base = payload.tax_base
    missing: list[str] = []
    if not tax_base.lines:
        missing.append("lines")

    address = tax_base.address
    if address is None:
        missing.append("address")
        return missing
    if address.country is None or not address.country.code:
        missing.append("address.country")
    if not address.postal_code:
        missing.append("address.postalCode")
    if not address.street_address1:
        missing.append("address.streetAddress1")
    return missing


class CalculateTaxesUseCase:
    """Computes checkout taxes with AvaTax.

    Args:
        config_extractor: Parses the tenant configuration from metadata.
        avatax_client_factory: Creates a client for a provider connection.
        metadata_fetcher: Loads private metadata from Saleor on cache misses.
    """

    def __init__(
        self,
        config_extractor: AppConfigExtractor,
        avatax_client_factory: AvataxClientFactory,
        metadata_fetcher: MetadataFetcher,
    ) -> None:
        self._config_extractor = config_extractor
        self._avatax_client_factory = avatax_client_factory
        self._metadata_fetcher = metadata_fetcher

    async def _resolve_connection(
        self,
        payload: CalculateTaxesPayload,
        auth_data: AuthData,
        metadata_cache: MetadataCache,
    ) -> Result[AvataxConnectionConfig, TaxError]:
        try:
            metadata = await metadata_cache.resolve(
                lambda: self._metadata_fetcher(auth_data)
            )
        except Exception as exc:  # noqa: BLE001
            return Err(UnhandledError("Failed to fetch app metadata", exc))

        extracted = self._config_extractor.extract_app_config_from_private_metadata(
            metadata
        )
        if isinstance(extracted, Err):
            return Err(
                ConfigBrokenError("App configuration is invalid", extracted.error)
            )

        connection = extracted.value.get_connection_for_channel(payload.channel_slug)
        if connection is None:
            return Err(
                ConfigBrokenError(
                    f"No provider connection assigned to channel {payload.channel_slug}"
                )
            )
        return Ok(connection.config)

    async def calculate_taxes(
        self,
        payload: CalculateTaxesPayload,
        auth_data: AuthData,
        metadata_cache: MetadataCache,
    ) -> Result[TaxComputation, TaxError]:
        """Calculate taxes for a checkout.

        Args:
            payload: Verified webhook payload.
            auth_data: Auth data of the tenant that sent it.
            metadata_cache: Request scoped metadata, filled by the handler.

        Returns:
            Result[TaxComputation, TaxError]: The computed taxes or one of the
                four error variants.

        Raises:
            AvataxInvalidAddressError: When the configured ship-from address
                is incomplete.
        """
        if missing := find_missing_payload_fields(payload):
            logger.warning("Checkout payload is incomplete", missing_fields=missing)
            return Err(
                ExpectedIncompletePayloadError(
                    f"Payload is missing: {', '.join(missing)}"
                )
            )

        resolved = await self._resolve_connection(payload, auth_data, metadata_cache)
        if isinstance(resolved, Err):
            return resolved
        connection_config = resolved.value

        model = AvataxTransactionBuilder(connection_config).build(payload)
        client = self._avatax_client_factory(connection_config)

        try:
            with trace_operation(
                "avatax.calculate_taxes", is_sandbox=connection_config.is_sandbox
            ):
                transaction = await client.create_or_adjust_transaction(model)
        except AvataxApiError as exc:
            return Err(_classify_avatax_error(exc))
        except Exception as exc:  # noqa: BLE001
            return Err(UnhandledError("Unexpected error while calling AvaTax", exc))

        logger.info(
            "Taxes calculated",
            lines_count=len(transaction.lines),
            total_tax=transaction.total_tax,
        )
        return Ok(build_response(transaction, payload.tax_base.prices_entered_with_tax))


def _classify_avatax_error(error: AvataxApiError) -> TaxError:
    if error.code in KNOWN_AVATAX_ERROR_CODES:
        logger.warning("AvaTax rejected the checkout", avatax_code=error.code)
        return FailedCalculatingTaxesError(error.message, error)
    if error.status_code in CREDENTIAL_REJECTION_STATUSES:
        return ConfigBrokenError("AvaTax rejected the configured credentials", error)
    return UnhandledError(f"Unexpected AvaTax error {error.code}", error)
