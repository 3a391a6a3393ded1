"""Inbound ``CHECKOUT_CALCULATE_TAXES`` webhook payload.

Mirrors the subscription query the app registers in Saleor. Everything the
use case might find missing (address, lines) is optional here: a payload
that parses is "well formed", completeness is judged by the use case.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from src.infrastructure.saleor.models import MetadataItem, SaleorModel


class Recipient(SaleorModel):
    """The app receiving the webhook, with its private metadata."""

    private_metadata: list[MetadataItem] = Field(default_factory=list)


class TaxChannel(SaleorModel):
    slug: str


class TaxUser(SaleorModel):
    id: str
    email: str | None = None


class TaxSourceObject(SaleorModel):
    """The checkout (or order) taxes are calculated for."""

    typename: str = Field(default="Checkout", alias="__typename")
    id: str
    user: TaxUser | None = None


class TaxCountry(SaleorModel):
    code: str


class TaxAddress(SaleorModel):
    street_address1: str = ""
    street_address2: str = ""
    city: str = ""
    country_area: str = ""
    postal_code: str = ""
    country: TaxCountry | None = None


class TaxMoney(SaleorModel):
    amount: float


class TaxDiscount(SaleorModel):
    amount: TaxMoney


class TaxLineSource(SaleorModel):
    """Checkout line the tax line was built from."""

    id: str
    product_sku: str | None = None
    product_name: str | None = None
    tax_code: str | None = None


class TaxBaseLine(SaleorModel):
    source_line: TaxLineSource
    quantity: int
    unit_price: TaxMoney
    total_price: TaxMoney


class TaxBase(SaleorModel):
    channel: TaxChannel
    source_object: TaxSourceObject
    address: TaxAddress | None = None
    currency: str
    prices_entered_with_tax: bool = False
    shipping_price: TaxMoney = Field(default_factory=lambda: TaxMoney(amount=0.0))
    discounts: list[TaxDiscount] = Field(default_factory=list)
    lines: list[TaxBaseLine] = Field(default_factory=list)


class CalculateTaxesPayload(SaleorModel):
    """Body of the checkout tax calculation webhook."""

    version: str | None = None
    recipient: Recipient | None = None
    tax_base: TaxBase
    # GraphQL errors Saleor hit while resolving the subscription
    errors: list[dict[str, Any]] | None = None

    @property
    def checkout_id(self) -> str:
        return self.tax_base.source_object.id

    @property
    def channel_slug(self) -> str:
        return self.tax_base.channel.slug

    @property
    def app_metadata(self) -> list[MetadataItem]:
        return self.recipient.private_metadata if self.recipient else []
