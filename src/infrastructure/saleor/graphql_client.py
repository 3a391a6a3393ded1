"""Minimal async GraphQL client for the Saleor API.

Only what the apps need: POST a document with variables using the app
token, trace the call, and turn transport or GraphQL errors into
``ExternalServiceError``.
"""

from __future__ import annotations

import httpx
from loguru import logger

from src.core.exceptions import ExternalServiceError
from src.core.observability import trace_operation
from src.core.types import JsonObject
from src.infrastructure.constants import SALEOR_PAGE_SIZE
from src.infrastructure.saleor import documents
from src.infrastructure.saleor.models import (
    MetadataItem,
    OwnWebhook,
    Product,
)

SALEOR = "saleor"


class SaleorGraphQLClient:
    """GraphQL client bound to one Saleor instance and app token.

    Args:
        saleor_api_url: GraphQL endpoint of the Saleor instance.
        token: App token used as bearer credential.
        http_client: Shared async HTTP client.
        timeout: Per-call timeout in seconds.
    """

    def __init__(
        self,
        saleor_api_url: str,
        token: str,
        http_client: httpx.AsyncClient,
        timeout: float = 10.0,
    ) -> None:
        self.saleor_api_url = saleor_api_url
        self._token = token
        self._http_client = http_client
        self._timeout = timeout

    async def execute(
        self, document: str, variables: JsonObject | None = None
    ) -> JsonObject:
        """Execute a query or mutation and return its ``data`` object.

        Args:
            document: GraphQL document.
            variables: Variables for the document.

        Returns:
            JsonObject: The ``data`` member of the response.

        Raises:
            ExternalServiceError: On transport failures, non-2xx responses
                or a response carrying GraphQL ``errors``.
        """
        operation = _operation_name(document)
        with trace_operation("saleor.graphql", operation=operation):
            try:
                response = await self._http_client.post(
                    self.saleor_api_url,
                    json={"query": document, "variables": variables or {}},
                    headers={"Authorization": f"Bearer {self._token}"},
                    timeout=self._timeout,
                )
            except httpx.HTTPError as exc:
                raise ExternalServiceError(
                    f"Saleor request {operation} failed",
                    service=SALEOR,
                    context={"operation": operation},
                    cause=exc,
                ) from exc

        if response.is_error:
            raise ExternalServiceError(
                f"Saleor responded with HTTP {response.status_code} to {operation}",
                service=SALEOR,
                status_code=response.status_code,
                context={"operation": operation},
            )

        body = response.json()
        if errors := body.get("errors"):
            raise ExternalServiceError(
                f"Saleor returned errors for {operation}",
                service=SALEOR,
                status_code=response.status_code,
                context={
                    "operation": operation,
                    "errors": [error.get("message") for error in errors],
                },
            )

        logger.debug("Saleor operation {} succeeded", operation)
        return body.get("data") or {}

    async def fetch_app_private_metadata(self) -> list[MetadataItem]:
        """Fetch the private metadata of the app owning the token."""
        data = await self.execute(documents.FETCH_APP_PRIVATE_METADATA)
        app = data.get("app") or {}
        items = app.get("privateMetadata", [])
        return [MetadataItem.model_validate(item) for item in items]

    async def fetch_own_webhooks(self, app_id: str) -> list[OwnWebhook] | None:
        """Fetch webhooks registered by the app.

        Returns:
            list[OwnWebhook] | None: None when Saleor did not return the app.
        """
        data = await self.execute(documents.FETCH_OWN_WEBHOOKS, {"id": app_id})
        app = data.get("app")
        if not app or app.get("webhooks") is None:
            return None
        return [OwnWebhook.model_validate(webhook) for webhook in app["webhooks"]]

    async def disable_webhook(self, webhook_id: str) -> None:
        """Deactivate a single webhook.

        Raises:
            ExternalServiceError: When Saleor reports mutation errors.
        """
        data = await self.execute(documents.DISABLE_WEBHOOK, {"id": webhook_id})
        result = data.get("webhookUpdate") or {}
        if errors := result.get("errors"):
            raise ExternalServiceError(
                f"Could not disable webhook {webhook_id}",
                service=SALEOR,
                context={"errors": [error.get("message") for error in errors]},
            )

    async def fetch_all_products(
        self, page_size: int = SALEOR_PAGE_SIZE
    ) -> list[Product]:
        """Fetch the whole catalogue following cursor pagination."""
        products: list[Product] = []
        after: str | None = None

        while True:
            data = await self.execute(
                documents.FETCH_PRODUCTS, {"first": page_size, "after": after}
            )
            connection = data.get("products") or {}
            products.extend(
                Product.model_validate(edge["node"])
                for edge in connection.get("edges", [])
            )

            page_info = connection.get("pageInfo") or {}
            after = page_info.get("endCursor")
            if not page_info.get("hasNextPage") or not after:
                break

        logger.info("Fetched {} products from Saleor", len(products))
        return products


def _operation_name(document: str) -> str:
    """Extract the operation name ("query Foo(...)" -> "Foo") for tracing."""
    tokens = document.split()
    if len(tokens) >= 2 and tokens[0] in ("query", "mutation"):  # noqa: PLR2004
        return tokens[1].split("(")[0].split("{")[0]
    return "anonymous"
