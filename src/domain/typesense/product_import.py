"""Initial indexing of the product catalogue into Typesense."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from loguru import logger

from src.infrastructure.saleor.models import Product
from src.infrastructure.typesense import ImportResult

BATCH_SIZE = 100


class BatchSearchProvider(Protocol):
    async def update_batch_products(
        self, products: Sequence[Product]
    ) -> ImportResult: ...


def count_variants(products: Sequence[Product], index: int) -> int:
    """Number of variants among ``products[:index]``."""
    return sum(len(product.variants or []) for product in products[:index])


@dataclass
class ImportProgress:
    """Progress of an import, reported to the dashboard."""

    product_count: int = 0
    imported_products: int = 0
    variant_count: int = 0
    total_variant_count: int = 0
    all_imported: bool = False
    rejected_documents: int = 0


class ProductImporter:
    """Uploads products to Typesense in fixed size batches.

    Args:
        search_provider: Provider of the tenant.
        batch_size: Products per import request.
    """

    def __init__(
        self, search_provider: BatchSearchProvider, batch_size: int = BATCH_SIZE
    ) -> None:
        self._search_provider = search_provider
        self._batch_size = batch_size

    async def import_products(self, products: Sequence[Product]) -> ImportProgress:
        """Import ``products`` batch by batch.

        Documents Typesense rejects inside a batch are counted in
        ``rejected_documents``; the import carries on.

        Raises:
            TypesenseError: When an import request fails. No progress is
                returned and later batches are not sent.
        """
        progress = ImportProgress(
            product_count=len(products),
            total_variant_count=count_variants(products, len(products)),
        )
        current_index = 0

        while current_index < len(products):
            batch = products[current_index : current_index + self._batch_size]
            result = await self._search_provider.update_batch_products(batch)
            current_index = min(current_index + self._batch_size, len(products))
            progress.rejected_documents += len(result.failed)
            logger.debug(
                "Imported batch",
                imported_products=current_index,
                product_count=len(products),
                rejected_documents=len(result.failed),
            )

        progress.imported_products = current_index
        progress.variant_count = count_variants(products, current_index)
        progress.all_imported = current_index >= len(products)
        return progress
