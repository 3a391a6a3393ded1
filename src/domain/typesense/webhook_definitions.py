"""Webhooks the Typesense app registers in Saleor."""

from __future__ import annotations

from collections.abc import Iterable

# Names of the webhooks declared in the app manifest, one per catalogue event.
EXPECTED_WEBHOOK_NAMES: tuple[str, ...] = (
    "Typesense Product Created",
    "Typesense Product Updated",
    "Typesense Product Deleted",
    "Typesense Product Variant Created",
    "Typesense Product Variant Updated",
    "Typesense Product Variant Deleted",
    "Typesense Product Variant Out Of Stock",
    "Typesense Product Variant Back In Stock",
)


def is_webhook_update_needed(existing_webhook_names: Iterable[str]) -> bool:
    """Whether any webhook from the manifest is missing in Saleor."""
    existing = set(existing_webhook_names)
    return any(name not in existing for name in EXPECTED_WEBHOOK_NAMES)
