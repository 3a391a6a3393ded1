"""Pydantic projections of Saleor GraphQL objects.

Saleor speaks camelCase; the models expose snake_case attributes and accept
both spellings when validating.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SaleorModel(BaseModel):
    """Base model for immutable Saleor objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class MetadataItem(SaleorModel):
    """A single key/value entry of Saleor (private) metadata."""

    key: str
    value: str


class AuthData(SaleorModel):
    """Credentials of one app installation (one tenant)."""

    saleor_api_url: str = Field(..., description="GraphQL endpoint of the instance")
    token: str = Field(..., description="App token issued during installation")
    app_id: str = Field(..., description="Global ID of the app in that instance")


class WebhookEvent(SaleorModel):
    event_type: str


class OwnWebhook(SaleorModel):
    """A webhook registered by this app in Saleor."""

    id: str
    name: str
    is_active: bool
    async_events: list[WebhookEvent] = Field(default_factory=list)
    sync_events: list[WebhookEvent] = Field(default_factory=list)


class Money(SaleorModel):
    amount: float
    currency: str | None = None


class Channel(SaleorModel):
    slug: str
    currency_code: str | None = None


class VariantChannelListing(SaleorModel):
    channel: Channel
    price: Money | None = None


class Category(SaleorModel):
    id: str
    name: str
    slug: str


class Thumbnail(SaleorModel):
    url: str


class ProductVariant(SaleorModel):
    id: str
    name: str
    sku: str | None = None
    quantity_available: int | None = None
    channel_listings: list[VariantChannelListing] = Field(default_factory=list)


class Product(SaleorModel):
    """Product projection used for search indexing."""

    id: str
    name: str
    slug: str
    description: str | None = None
    seo_title: str | None = None
    seo_description: str | None = None
    category: Category | None = None
    thumbnail: Thumbnail | None = None
    variants: list[ProductVariant] | None = None
