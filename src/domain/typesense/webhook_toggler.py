"""Deactivation of the app's own webhooks."""

from __future__ import annotations

from typing import Protocol

from loguru import logger

from src.infrastructure.saleor.models import OwnWebhook


class WebhookClient(Protocol):
    async def fetch_own_webhooks(self, app_id: str) -> list[OwnWebhook] | None: ...

    async def disable_webhook(self, webhook_id: str) -> None: ...


class WebhookActivityTogglerService:
    """Turns the app's webhooks off when they cannot be served.

    Without a working Typesense configuration every catalogue webhook would
    fail, so Saleor is asked to stop sending them.

    Args:
        app_id: Global ID of the app in Saleor.
        client: GraphQL client of the tenant.
    """

    def __init__(self, app_id: str, client: WebhookClient) -> None:
        self._app_id = app_id
        self._client = client

    async def disable_own_webhooks(self) -> list[str]:
        """Disable every active webhook of the app.

        Returns:
            list[str]: IDs of the webhooks that were disabled.
        """
        webhooks = await self._client.fetch_own_webhooks(self._app_id) or []
        disabled: list[str] = []
        for webhook in webhooks:
            if not webhook.is_active:
                continue
            await self._client.disable_webhook(webhook.id)
            disabled.append(webhook.id)

        logger.info("Disabled own webhooks", disabled_count=len(disabled))
        return disabled
