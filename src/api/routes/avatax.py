"""AvaTax app: checkout tax calculation webhook.

Saleor calls this endpoint synchronously while a customer is checking out
and waits for the computed taxes. Every outcome produces exactly one
response: the computed taxes with 200, or a ``{"message": ...}`` body whose
status tells Saleor whether retrying can help (400) or not (500).
"""

from typing import Annotated, assert_never

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from src.api.constants import UNHANDLED_ERROR_MESSAGE
from src.api.dependencies import (
    SaleorWebhookContext,
    get_calculate_taxes_use_case,
    get_config_extractor,
    get_configuration_logger,
    get_subscription_error_checker,
    verify_calculate_taxes_webhook,
)
from src.api.schemas.webhooks import MessageResponse
from src.api.utils.responses import ORJSONResponse, message_response
from src.core.error_context import sanitize_metadata
from src.core.error_tracking import capture_exception, set_tag
from src.core.logging import webhook_log_context
from src.core.observability import ObservabilityAttributes, add_span_attributes
from src.core.result import Err, Ok
from src.domain.avatax import (
    AppConfigExtractor,
    AppConfigurationLogger,
    AvataxInvalidAddressError,
    CalculateTaxesPayload,
    CalculateTaxesUseCase,
    ConfigBrokenError,
    ExpectedIncompletePayloadError,
    FailedCalculatingTaxesError,
    LogConfigurationMetricError,
    MetadataCache,
    SubscriptionPayloadErrorChecker,
    TaxComputation,
    TaxError,
    UnhandledError,
)
from src.domain.avatax.app_config import AppConfig
from src.domain.avatax.tax_errors import INVALID_APP_ADDRESS_MESSAGE
from src.infrastructure.saleor import AuthData

router = APIRouter(prefix="/api/webhooks", tags=["avatax"])

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": MessageResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
}


def _tag_request(payload: CalculateTaxesPayload) -> None:
    """Attach Saleor version, channel and checkout to Sentry and the span."""
    if payload.version:
        set_tag(ObservabilityAttributes.SALEOR_VERSION, payload.version)
    set_tag(ObservabilityAttributes.CHANNEL_SLUG, payload.channel_slug)
    set_tag(ObservabilityAttributes.CHECKOUT_ID, payload.checkout_id)
    add_span_attributes(
        **{
            ObservabilityAttributes.SALEOR_VERSION: payload.version,
            ObservabilityAttributes.CHANNEL_SLUG: payload.channel_slug,
            ObservabilityAttributes.CHECKOUT_ID: payload.checkout_id,
        }
    )


def _log_configuration(
    configuration_logger: AppConfigurationLogger, config: AppConfig, channel_slug: str
) -> None:
    try:
        configuration_logger.log_configuration(config, channel_slug)
    except Exception as exc:  # noqa: BLE001
        error = LogConfigurationMetricError("Failed to log configuration")
        error.__cause__ = exc
        logger.warning("Failed to log configuration", error_type=type(exc).__name__)
        capture_exception(error)


def error_response(error: TaxError, checkout_id: str) -> Response:
    """Map a use case error onto the webhook response.

    Raises:
        AssertionError: For an error type outside the ``TaxError`` union.
    """
    match error:
        case ExpectedIncompletePayloadError():
            logger.warning("Incomplete payload: {}", error.message)
            return message_response(
                status.HTTP_400_BAD_REQUEST,
                "Taxes can't be calculated due to incomplete payload "
                f"for checkout: {checkout_id}",
            )
        case ConfigBrokenError():
            logger.error("Invalid configuration: {}", error.message)
            return message_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Failed to calculate taxes due to invalid configuration "
                f"for checkout: {checkout_id}",
            )
        case FailedCalculatingTaxesError():
            logger.warning("Failed to calculate taxes: {}", error.message)
            return message_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                f"Failed to calculate taxes for checkout: {checkout_id}",
            )
        case UnhandledError():
            logger.error("Unhandled error while calculating taxes: {}", error.message)
            capture_exception(error)
            return message_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Failed to calculate taxes (Unhandled error) "
                f"for checkout: {checkout_id}",
            )
        case _:
            assert_never(error)


async def _calculate(
    payload: CalculateTaxesPayload,
    auth_data: AuthData,
    config_extractor: AppConfigExtractor,
    configuration_logger: AppConfigurationLogger,
    use_case: CalculateTaxesUseCase,
) -> Response:
    checkout_id = payload.checkout_id
    metadata = payload.app_metadata

    extracted = config_extractor.extract_app_config_from_private_metadata(metadata)
    if isinstance(extracted, Err):
        logger.warning(
            "App configuration is broken: {}",
            extracted.error.message,
            private_metadata=sanitize_metadata(
                [item.model_dump() for item in metadata]
            ),
        )
        return message_response(
            status.HTTP_400_BAD_REQUEST,
            f"App configuration is broken for checkout: {checkout_id}",
        )
    _log_configuration(configuration_logger, extracted.value, payload.channel_slug)

    metadata_cache = MetadataCache()
    metadata_cache.set_metadata(metadata)

    match await use_case.calculate_taxes(payload, auth_data, metadata_cache):
        case Ok(computation):
            return _computation_response(computation)
        case Err(error):
            return error_response(error, checkout_id)


def _computation_response(computation: TaxComputation) -> Response:
    logger.info("Taxes calculated successfully", lines_count=len(computation.lines))
    return ORJSONResponse(
        status_code=status.HTTP_200_OK, content=computation.model_dump(mode="json")
    )


@router.post(
    "/checkout-calculate-taxes",
    response_model=TaxComputation,
    responses=_ERROR_RESPONSES,
)
async def checkout_calculate_taxes(
    webhook: Annotated[SaleorWebhookContext, Depends(verify_calculate_taxes_webhook)],
    use_case: Annotated[CalculateTaxesUseCase, Depends(get_calculate_taxes_use_case)],
    config_extractor: Annotated[AppConfigExtractor, Depends(get_config_extractor)],
    configuration_logger: Annotated[
        AppConfigurationLogger, Depends(get_configuration_logger)
    ],
    subscription_error_checker: Annotated[
        SubscriptionPayloadErrorChecker, Depends(get_subscription_error_checker)
    ],
) -> Response:
    """Calculate taxes for a checkout (``CHECKOUT_CALCULATE_TAXES``)."""
    try:
        payload = CalculateTaxesPayload.model_validate_json(webhook.body)
    except PydanticValidationError as exc:
        logger.warning("Invalid payload", errors_count=exc.error_count())
        return message_response(status.HTTP_400_BAD_REQUEST, "Invalid payload")

    subscription_error_checker.check_payload(payload)
    _tag_request(payload)

    with webhook_log_context(
        saleor_version=payload.version,
        channel_slug=payload.channel_slug,
        checkout_id=payload.checkout_id,
    ):
        logger.info("Handler for CHECKOUT_CALCULATE_TAXES webhook called")
        try:
            return await _calculate(
                payload,
                webhook.auth_data,
                config_extractor,
                configuration_logger,
                use_case,
            )
        except AvataxInvalidAddressError as exc:
            logger.warning(
                "Ship-from address in app configuration is incomplete",
                missing_fields=exc.missing_fields,
            )
            return message_response(
                status.HTTP_400_BAD_REQUEST, INVALID_APP_ADDRESS_MESSAGE
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unhandled error in tax calculation webhook")
            capture_exception(exc)
            return message_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, UNHANDLED_ERROR_MESSAGE
            )
