"""Conversion of Saleor products into Typesense documents.

One document is produced per product variant; product level fields are
copied onto every variant document so that search results can be rendered
without a second lookup.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import orjson

from src.core.types import SearchDocument
from src.infrastructure.saleor.models import Product, ProductVariant

_HTML_TAG = re.compile(r"<[^>]+>")


def description_to_text(description: str | None) -> str:
    """Flatten a Saleor EditorJS description into plain text.

    Args:
        description: EditorJS JSON string as stored by Saleor.

    Returns:
        str: Block texts joined by newlines, HTML tags stripped.
    """
    if not description:
        return ""
    try:
        parsed = orjson.loads(description)
    except orjson.JSONDecodeError:
        return _HTML_TAG.sub("", description)

    blocks = parsed.get("blocks", []) if isinstance(parsed, dict) else []
    texts = []
    for block in blocks:
        data = block.get("data") or {}
        if text := data.get("text"):
            texts.append(_HTML_TAG.sub("", str(text)))
        texts.extend(_HTML_TAG.sub("", str(item)) for item in data.get("items", []))
    return "\n".join(texts)


def variant_to_document(product: Product, variant: ProductVariant) -> SearchDocument:
    """Build the full (unfiltered) search document for a variant."""
    prices = [
        listing.price.amount for listing in variant.channel_listings if listing.price
    ]
    return {
        "id": variant.id,
        "variantId": variant.id,
        "variantName": variant.name,
        "sku": variant.sku or "",
        "quantityAvailable": variant.quantity_available,
        "productId": product.id,
        "productName": product.name,
        "productSlug": product.slug,
        "productDescription": description_to_text(product.description),
        "seoTitle": product.seo_title or "",
        "seoDescription": product.seo_description or "",
        "categoryName": product.category.name if product.category else "",
        "categorySlug": product.category.slug if product.category else "",
        "thumbnail": product.thumbnail.url if product.thumbnail else "",
        "channels": [listing.channel.slug for listing in variant.channel_listings],
        "minPrice": min(prices) if prices else None,
    }


def products_to_documents(
    products: Iterable[Product], enabled_keys: Iterable[str] = ()
) -> list[SearchDocument]:
    """Convert products to variant documents, keeping only enabled fields.

    Args:
        products: Products to convert. Products without variants produce no
            documents.
        enabled_keys: Typesense fields to keep. Empty means all fields;
            ``id`` is always kept.

    Returns:
        list[SearchDocument]: One document per variant.
    """
    keys = set(enabled_keys)
    documents = []
    for product in products:
        for variant in product.variants or []:
            document = variant_to_document(product, variant)
            if keys:
                document = {k: v for k, v in document.items() if k in keys or k == "id"}
            documents.append(document)
    return documents
