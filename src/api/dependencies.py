"""FastAPI dependencies: request verification and service wiring.

Routes receive fully built services through ``Depends``; tests replace
them with ``app.dependency_overrides``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Annotated

import httpx
from fastapi import Depends, Request
from loguru import logger

from src.core.config import Settings, get_settings
from src.core.constants import (
    CHECKOUT_CALCULATE_TAXES_EVENT,
    SALEOR_API_URL_HEADER,
    SALEOR_AUTHORIZATION_BEARER_HEADER,
    SALEOR_EVENT_HEADER,
    SALEOR_SIGNATURE_HEADER,
)
from src.core.context import RequestContext
from src.core.exceptions import UnauthorizedError, ValidationError
from src.core.security import verify_signature
from src.domain.avatax import (
    AppConfigExtractor,
    AppConfigurationLogger,
    CalculateTaxesUseCase,
    SubscriptionPayloadErrorChecker,
)
from src.domain.avatax.app_config import AvataxConnectionConfig
from src.domain.typesense import (
    TypesenseConnectionConfig,
    WebhookActivityTogglerService,
)
from src.infrastructure.avatax import AvataxClient
from src.infrastructure.http import get_http_client
from src.infrastructure.saleor import (
    AuthData,
    FileAPL,
    MetadataItem,
    MetadataSettingsManager,
    SaleorGraphQLClient,
)
from src.infrastructure.typesense import TypesenseSearchProvider

SettingsDep = Annotated[Settings, Depends(get_settings)]
HttpClientDep = Annotated[httpx.AsyncClient, Depends(get_http_client)]


@lru_cache
def _apl_for(path: Path) -> FileAPL:
    return FileAPL(path)


def get_apl(settings: SettingsDep) -> FileAPL:
    """Get the auth persistence layer configured for this process."""
    return _apl_for(settings.saleor_config.apl_file_path)


AplDep = Annotated[FileAPL, Depends(get_apl)]


@dataclass(frozen=True)
class SaleorWebhookContext:
    """A verified webhook delivery."""

    auth_data: AuthData
    event: str
    body: bytes


async def _registered_auth_data(apl: FileAPL, saleor_api_url: str) -> AuthData:
    auth_data = await apl.get(saleor_api_url)
    if auth_data is None:
        raise UnauthorizedError(
            "Saleor instance is not registered",
            context={"saleor_api_url": saleor_api_url},
        )
    RequestContext.set_saleor_api_url(saleor_api_url)
    return auth_data


async def verify_calculate_taxes_webhook(
    request: Request, settings: SettingsDep, apl: AplDep
) -> SaleorWebhookContext:
    """Verify a ``CHECKOUT_CALCULATE_TAXES`` delivery.

    Raises:
        ValidationError: When Saleor headers are missing or name another event.
        UnauthorizedError: When the signature does not match or the Saleor
            instance is not registered.
    """
    saleor_api_url = request.headers.get(SALEOR_API_URL_HEADER)
    if not saleor_api_url:
        raise ValidationError(
            "Missing saleor-api-url header", context={"header": SALEOR_API_URL_HEADER}
        )

    event = (request.headers.get(SALEOR_EVENT_HEADER) or "").lower()
    if event != CHECKOUT_CALCULATE_TAXES_EVENT:
        raise ValidationError(
            "Unexpected saleor-event header",
            context={"header": SALEOR_EVENT_HEADER, "event": event},
        )

    body = await request.body()
    if settings.verify_webhook_signatures:
        secret = settings.saleor_config.webhook_secret
        signature = request.headers.get(SALEOR_SIGNATURE_HEADER)
        if secret is None or not verify_signature(secret, body, signature):
            raise UnauthorizedError(
                "Invalid webhook signature", context={"header": SALEOR_SIGNATURE_HEADER}
            )
    else:
        logger.debug("Webhook signature verification disabled")

    auth_data = await _registered_auth_data(apl, saleor_api_url)
    return SaleorWebhookContext(auth_data=auth_data, event=event, body=body)


async def require_dashboard_auth(request: Request, apl: AplDep) -> AuthData:
    """Authenticate a call from the app's dashboard.

    Raises:
        UnauthorizedError: When the token header is missing or the Saleor
            instance is not registered.
    """
    saleor_api_url = request.headers.get(SALEOR_API_URL_HEADER)
    token = request.headers.get(SALEOR_AUTHORIZATION_BEARER_HEADER)
    if not saleor_api_url or not token:
        raise UnauthorizedError(
            "Missing dashboard authentication headers",
            context={
                "headers": [SALEOR_API_URL_HEADER, SALEOR_AUTHORIZATION_BEARER_HEADER]
            },
        )
    return await _registered_auth_data(apl, saleor_api_url)


def get_config_extractor() -> AppConfigExtractor:
    return AppConfigExtractor()


def get_configuration_logger() -> AppConfigurationLogger:
    return AppConfigurationLogger(logger)


def get_subscription_error_checker() -> SubscriptionPayloadErrorChecker:
    return SubscriptionPayloadErrorChecker()


def get_calculate_taxes_use_case(
    settings: SettingsDep,
    http_client: HttpClientDep,
    config_extractor: Annotated[AppConfigExtractor, Depends(get_config_extractor)],
) -> CalculateTaxesUseCase:
    """Wire the tax calculation use case with real clients."""
    avatax = settings.avatax_config

    def avatax_client_factory(config: AvataxConnectionConfig) -> AvataxClient:
        return AvataxClient(
            base_url=(
                avatax.sandbox_base_url
                if config.is_sandbox
                else avatax.production_base_url
            ),
            username=config.credentials.username,
            password=config.credentials.password,
            http_client=http_client,
            timeout=avatax.request_timeout,
            client_identifier=avatax.client_identifier,
        )

    async def metadata_fetcher(auth_data: AuthData) -> list[MetadataItem]:
        client = SaleorGraphQLClient(
            auth_data.saleor_api_url,
            auth_data.token,
            http_client,
            timeout=settings.saleor_config.graphql_timeout,
        )
        return await client.fetch_app_private_metadata()

    return CalculateTaxesUseCase(
        config_extractor, avatax_client_factory, metadata_fetcher
    )


@dataclass(frozen=True)
class TypesenseServiceFactories:
    """Builders for the services of the Typesense routes.

    Tests override ``get_typesense_factories`` to return fakes instead of
    patching clients.
    """

    graphql_client_factory: Callable[[str, str], SaleorGraphQLClient]
    settings_manager_factory: Callable[
        [SaleorGraphQLClient, str], MetadataSettingsManager
    ]
    webhook_activity_toggler_factory: Callable[
        [str, SaleorGraphQLClient], WebhookActivityTogglerService
    ]
    typesense_search_provider_factory: Callable[
        [TypesenseConnectionConfig, list[str]], TypesenseSearchProvider
    ]


def get_typesense_factories(
    settings: SettingsDep, http_client: HttpClientDep
) -> TypesenseServiceFactories:
    """Wire the Typesense services with real clients."""

    def graphql_client_factory(saleor_api_url: str, token: str) -> SaleorGraphQLClient:
        return SaleorGraphQLClient(
            saleor_api_url,
            token,
            http_client,
            timeout=settings.saleor_config.graphql_timeout,
        )

    def settings_manager_factory(
        client: SaleorGraphQLClient, app_id: str
    ) -> MetadataSettingsManager:
        _ = app_id  # metadata is read through the app token, not by id
        return MetadataSettingsManager(client)

    def typesense_search_provider_factory(
        config: TypesenseConnectionConfig, enabled_keys: list[str]
    ) -> TypesenseSearchProvider:
        return TypesenseSearchProvider(
            host=config.host,
            api_key=config.api_key,
            protocol=config.protocol,
            port=config.port,
            connection_timeout_seconds=config.connection_timeout_seconds,
            enabled_keys=enabled_keys,
            collection_name=settings.typesense_config.collection_name,
            http_client=http_client,
        )

    return TypesenseServiceFactories(
        graphql_client_factory=graphql_client_factory,
        settings_manager_factory=settings_manager_factory,
        webhook_activity_toggler_factory=WebhookActivityTogglerService,
        typesense_search_provider_factory=typesense_search_provider_factory,
    )
