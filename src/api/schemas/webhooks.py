"""Response bodies of the Saleor facing routes."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.infrastructure.saleor.models import OwnWebhook


class MessageResponse(BaseModel):
    """Error body Saleor and the dashboard understand."""

    message: str = Field(
        ...,
        examples=["Failed to calculate taxes for checkout: Q2hlY2tvdXQ6MQ=="],
    )


class CamelResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WebhooksStatusResponse(CamelResponse):
    """Webhooks registered by the app and whether they are outdated."""

    webhooks: list[OwnWebhook]
    is_update_needed: bool


class ImportProductsResponse(CamelResponse):
    """Progress of a catalogue import."""

    product_count: int
    imported_products: int
    variant_count: int
    total_variant_count: int
    all_imported: bool
    rejected_documents: int
