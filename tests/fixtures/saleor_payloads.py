"""Builders for Saleor webhook payloads, tenant metadata and AvaTax responses."""

from typing import Any

import orjson

from src.core.security import compute_signature
from src.infrastructure.saleor.models import AuthData

SALEOR_API_URL = "https://shop.example.com/graphql/"
APP_ID = "QXBwOjE="
APP_TOKEN = "app-token"
CHECKOUT_ID = "Q2hlY2tvdXQ6MQ=="
CHANNEL_SLUG = "default-channel"
CONNECTION_ID = "avatax-connection-1"
WEBHOOK_SECRET = "webhook-secret"


def auth_data() -> AuthData:
    return AuthData(saleor_api_url=SALEOR_API_URL, token=APP_TOKEN, app_id=APP_ID)


def company_address(**overrides: Any) -> dict[str, Any]:
    address = {
        "country": "US",
        "zip": "92093",
        "state": "CA",
        "city": "La Jolla",
        "street": "9500 Gilman Drive",
        "street2": None,
    }
    address.update(overrides)
    return address


def provider_connections(**config_overrides: Any) -> list[dict[str, Any]]:
    config: dict[str, Any] = {
        "name": "AvaTax sandbox",
        "credentials": {"username": "avatax-user", "password": "avatax-password"},
        "isSandbox": True,
        "companyCode": "DEFAULT",
        "isAutocommit": False,
        "shippingTaxCode": "FR000000",
        "isDocumentRecordingEnabled": True,
        "address": company_address(),
    }
    config.update(config_overrides)
    return [{"id": CONNECTION_ID, "provider": "avatax", "config": config}]


def channel_configuration(
    channel_slug: str = CHANNEL_SLUG, provider_connection_id: str | None = CONNECTION_ID
) -> list[dict[str, Any]]:
    return [
        {
            "id": "channel-config-1",
            "config": {
                "channelSlug": channel_slug,
                "providerConnectionId": provider_connection_id,
            },
        }
    ]


def avatax_metadata(
    connections: list[dict[str, Any]] | None = None,
    channels: list[dict[str, Any]] | None = None,
) -> list[dict[str, str]]:
    """Private metadata entries holding a valid AvaTax configuration."""
    return [
        {
            "key": "provider-connections",
            "value": orjson.dumps(
                connections if connections is not None else provider_connections()
            ).decode(),
        },
        {
            "key": "channel-configuration",
            "value": orjson.dumps(
                channels if channels is not None else channel_configuration()
            ).decode(),
        },
    ]


def customer_address(**overrides: Any) -> dict[str, Any]:
    address: dict[str, Any] = {
        "streetAddress1": "600 Montgomery St",
        "streetAddress2": "",
        "city": "San Francisco",
        "countryArea": "CA",
        "postalCode": "94111",
        "country": {"code": "US"},
    }
    address.update(overrides)
    return address


def tax_line(
    line_id: str = "Q2hlY2tvdXRMaW5lOjE=",
    quantity: int = 2,
    total: float = 20.0,
    sku: str = "SKU-1",
) -> dict[str, Any]:
    return {
        "sourceLine": {
            "id": line_id,
            "productSku": sku,
            "productName": "T-shirt",
            "taxCode": "P0000000",
        },
        "quantity": quantity,
        "unitPrice": {"amount": total / quantity},
        "totalPrice": {"amount": total},
    }


_DEFAULT = object()


def calculate_taxes_payload(
    *,
    metadata: list[dict[str, str]] | None = None,
    address: Any = _DEFAULT,
    lines: list[dict[str, Any]] | None = None,
    shipping_amount: float = 5.0,
    discounts: list[float] | None = None,
    prices_entered_with_tax: bool = False,
    version: str | None = "3.20.0",
    errors: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Body of a ``CHECKOUT_CALCULATE_TAXES`` delivery (camelCase, as Saleor sends it)."""
    return {
        "version": version,
        "recipient": {
            "privateMetadata": metadata if metadata is not None else avatax_metadata()
        },
        "taxBase": {
            "channel": {"slug": CHANNEL_SLUG},
            "sourceObject": {
                "__typename": "Checkout",
                "id": CHECKOUT_ID,
                "user": {"id": "VXNlcjox", "email": "customer@example.com"},
            },
            "address": customer_address() if address is _DEFAULT else address,
            "currency": "USD",
            "pricesEnteredWithTax": prices_entered_with_tax,
            "shippingPrice": {"amount": shipping_amount},
            "discounts": [{"amount": {"amount": value}} for value in discounts or []],
            "lines": lines if lines is not None else [tax_line()],
        },
        "errors": errors,
    }


def avatax_transaction(
    line_amount: float = 20.0,
    line_tax: float = 1.7,
    shipping_amount: float = 5.0,
    shipping_tax: float = 0.0,
    rate: float = 0.085,
) -> dict[str, Any]:
    """A ``TransactionModel`` as returned by ``createoradjust``."""
    return {
        "code": "b7d1f0c2",
        "totalAmount": line_amount + shipping_amount,
        "totalTax": line_tax + shipping_tax,
        "lines": [
            {
                "lineNumber": "1",
                "itemCode": "SKU-1",
                "lineAmount": line_amount,
                "discountAmount": 0.0,
                "tax": line_tax,
                "taxCalculated": line_tax,
                "taxableAmount": line_amount,
                "taxIncluded": False,
                "details": [{"rate": rate, "tax": line_tax}],
            },
            {
                "lineNumber": "2",
                "itemCode": "Shipping",
                "lineAmount": shipping_amount,
                "discountAmount": 0.0,
                "tax": shipping_tax,
                "taxCalculated": shipping_tax,
                "taxableAmount": shipping_amount,
                "taxIncluded": False,
                "details": [],
            },
        ],
    }


def avatax_error(code: str, message: str = "AvaTax error") -> dict[str, Any]:
    return {"error": {"code": code, "message": message, "details": [{"code": code}]}}


def webhook_headers(
    body: bytes,
    *,
    event: str = "checkout_calculate_taxes",
    secret: str = WEBHOOK_SECRET,
    saleor_api_url: str = SALEOR_API_URL,
) -> dict[str, str]:
    """Headers Saleor sends with a signed sync webhook delivery."""
    return {
        "content-type": "application/json",
        "saleor-api-url": saleor_api_url,
        "saleor-event": event,
        "saleor-signature": compute_signature(secret, body),
    }


DASHBOARD_HEADERS = {
    "saleor-api-url": SALEOR_API_URL,
    "authorization-bearer": APP_TOKEN,
}
