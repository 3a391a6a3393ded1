"""Typesense search provider.

Wraps the two Typesense endpoints the app uses: ``/health`` to validate
credentials and ``/collections/{name}/documents/import`` to upsert product
variant documents in bulk (JSON lines).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import httpx
import orjson
from loguru import logger

from src.core.exceptions import ExternalServiceError
from src.core.observability import trace_operation
from src.infrastructure.constants import TYPESENSE_API_KEY_HEADER
from src.infrastructure.saleor.models import Product
from src.infrastructure.typesense.documents import products_to_documents

TYPESENSE = "typesense"


class TypesenseError(ExternalServiceError):
    """Typesense could not be reached or rejected a request."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message, service=TYPESENSE, status_code=status_code, cause=cause
        )


@dataclass
class ImportResult:
    """Outcome of one bulk import request."""

    imported: int = 0
    failed: list[str] = field(default_factory=list)


class TypesenseSearchProvider:
    """Search provider for one Typesense node.

    Args:
        host: Node host name.
        api_key: Admin API key.
        protocol: ``http`` or ``https``.
        port: Node port.
        connection_timeout_seconds: Timeout for every call.
        enabled_keys: Document fields to upload; empty uploads everything.
        collection_name: Target collection.
        http_client: Shared async HTTP client.
    """

    def __init__(
        self,
        *,
        host: str,
        api_key: str,
        protocol: str,
        port: int,
        connection_timeout_seconds: float,
        enabled_keys: Sequence[str],
        collection_name: str,
        http_client: httpx.AsyncClient,
    ) -> None:
        self.base_url = f"{protocol}://{host}:{port}"
        self.enabled_keys = list(enabled_keys)
        self.collection_name = collection_name
        self._headers = {TYPESENSE_API_KEY_HEADER: api_key}
        self._timeout = connection_timeout_seconds
        self._http_client = http_client

    async def _request(
        self, method: str, path: str, **kwargs: object
    ) -> httpx.Response:
        try:
            response = await self._http_client.request(
                method,
                f"{self.base_url}{path}",
                headers=self._headers,
                timeout=self._timeout,
                **kwargs,  # type: ignore[arg-type]
            )
        except httpx.HTTPError as exc:
            raise TypesenseError(
                f"Typesense request {method} {path} failed", cause=exc
            ) from exc

        if response.is_error:
            raise TypesenseError(
                f"Typesense responded with HTTP {response.status_code} to {path}",
                status_code=response.status_code,
            )
        return response

    async def ping(self) -> None:
        """Check that the node is healthy and the API key is accepted.

        Raises:
            TypesenseError: When the node is unreachable, rejects the key or
                reports itself unhealthy.
        """
        with trace_operation("typesense.ping", host=self.base_url):
            response = await self._request("GET", "/health")
        try:
            healthy = bool(orjson.loads(response.content).get("ok"))
        except (orjson.JSONDecodeError, AttributeError) as exc:
            raise TypesenseError(
                "Typesense health check returned an unexpected body", cause=exc
            ) from exc
        if not healthy:
            raise TypesenseError("Typesense reported unhealthy status")

    async def update_batch_products(self, products: Sequence[Product]) -> ImportResult:
        """Upsert documents for all variants of ``products``.

        Args:
            products: Products to index.

        Returns:
            ImportResult: Counts of imported and rejected documents.

        Raises:
            TypesenseError: When the import request itself fails.
        """
        documents = products_to_documents(products, self.enabled_keys)
        if not documents:
            return ImportResult()

        body = b"\n".join(orjson.dumps(document) for document in documents)
        with trace_operation(
            "typesense.import",
            collection=self.collection_name,
            documents=len(documents),
        ):
            response = await self._request(
                "POST",
                f"/collections/{self.collection_name}/documents/import",
                params={"action": "upsert"},
                content=body,
            )

        result = ImportResult()
        for line in response.text.splitlines():
            if not line.strip():
                continue
            status = orjson.loads(line)
            if status.get("success"):
                result.imported += 1
            else:
                result.failed.append(str(status.get("error", "unknown error")))

        if result.failed:
            logger.warning(
                "Typesense rejected {} of {} documents",
                len(result.failed),
                len(documents),
                first_error=result.failed[0],
            )
        return result
