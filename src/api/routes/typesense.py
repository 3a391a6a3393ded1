"""Typesense app: dashboard endpoints.

Both endpoints are called by the app's dashboard inside Saleor and are
authenticated with the ``saleor-api-url`` and ``authorization-bearer``
headers.
"""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from loguru import logger

from src.api.constants import APP_NOT_CONFIGURED_MESSAGE
from src.api.dependencies import (
    SettingsDep,
    TypesenseServiceFactories,
    get_typesense_factories,
    require_dashboard_auth,
)
from src.api.schemas.webhooks import (
    ImportProductsResponse,
    MessageResponse,
    WebhooksStatusResponse,
)
from src.api.utils.responses import ORJSONResponse, message_response
from src.domain.typesense import (
    AppConfigMetadataManager,
    ProductImporter,
    is_webhook_update_needed,
)
from src.infrastructure.saleor import AuthData
from src.infrastructure.typesense import TypesenseError

router = APIRouter(prefix="/api", tags=["typesense"])

AuthDataDep = Annotated[AuthData, Depends(require_dashboard_auth)]
FactoriesDep = Annotated[TypesenseServiceFactories, Depends(get_typesense_factories)]


@router.get(
    "/webhooks-status",
    response_model=WebhooksStatusResponse,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Empty body"}},
)
async def webhooks_status(auth_data: AuthDataDep, factories: FactoriesDep) -> Response:
    """Report the app's webhooks, disabling them when Typesense is unusable."""
    client = factories.graphql_client_factory(auth_data.saleor_api_url, auth_data.token)
    webhooks_toggler = factories.webhook_activity_toggler_factory(
        auth_data.app_id, client
    )
    settings_manager = factories.settings_manager_factory(client, auth_data.app_id)

    config_manager = AppConfigMetadataManager(settings_manager)
    config = await config_manager.get(auth_data.saleor_api_url)
    logger.debug("Fetched Typesense settings")

    if config.app_config is None:
        logger.debug("Settings not set, will disable webhooks")
        await webhooks_toggler.disable_own_webhooks()
    else:
        search_provider = factories.typesense_search_provider_factory(
            config.app_config, config.fields_mapping.enabled_typesense_fields
        )
        try:
            await search_provider.ping()
        except TypesenseError as exc:
            logger.debug(
                "Typesense ping failed, will disable webhooks: {}", exc.message
            )
            await webhooks_toggler.disable_own_webhooks()

    try:
        webhooks = await client.fetch_own_webhooks(auth_data.app_id)
    except Exception as exc:  # noqa: BLE001
        logger.error("Failed to fetch own webhooks: {}", exc)
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if webhooks is None:
        logger.error("Saleor returned no webhooks for the app")
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return ORJSONResponse(
        content=WebhooksStatusResponse(
            webhooks=webhooks,
            is_update_needed=is_webhook_update_needed(
                webhook.name for webhook in webhooks
            ),
        )
    )


@router.post(
    "/import-products",
    response_model=ImportProductsResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": MessageResponse}},
)
async def import_products(
    auth_data: AuthDataDep, factories: FactoriesDep, settings: SettingsDep
) -> Response:
    """Index the whole product catalogue in Typesense."""
    client = factories.graphql_client_factory(auth_data.saleor_api_url, auth_data.token)
    settings_manager = factories.settings_manager_factory(client, auth_data.app_id)
    config_manager = AppConfigMetadataManager(settings_manager)
    config = await config_manager.get(auth_data.saleor_api_url)

    if config.app_config is None:
        return message_response(status.HTTP_400_BAD_REQUEST, APP_NOT_CONFIGURED_MESSAGE)

    search_provider = factories.typesense_search_provider_factory(
        config.app_config, config.fields_mapping.enabled_typesense_fields
    )
    try:
        await search_provider.ping()
    except TypesenseError as exc:
        logger.warning("Typesense ping failed, import aborted: {}", exc.message)
        return message_response(status.HTTP_400_BAD_REQUEST, APP_NOT_CONFIGURED_MESSAGE)

    products = await client.fetch_all_products()
    importer = ProductImporter(
        search_provider, batch_size=settings.typesense_config.import_batch_size
    )
    progress = await importer.import_products(products)
    logger.info("Product import finished", **asdict(progress))

    return ORJSONResponse(content=ImportProductsResponse(**asdict(progress)))
