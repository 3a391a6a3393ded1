"""Mapping of a Saleor tax base onto an AvaTax ``CreateOrAdjustTransactionModel``.

Checkouts are always sent as ``SalesOrder`` documents: AvaTax computes the
taxes but never records the document.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any

from src.domain.avatax.app_config import AvataxCompanyAddress, AvataxConnectionConfig
from src.domain.avatax.payload import CalculateTaxesPayload, TaxAddress
from src.domain.avatax.tax_errors import AvataxInvalidAddressError

SALES_ORDER = "SalesOrder"
SHIPPING_ITEM_CODE = "Shipping"
DEFAULT_CUSTOMER_CODE = "0"
# Required by AvaTax to geolocate the ship-from point
_REQUIRED_COMPANY_ADDRESS_FIELDS = ("country", "zip", "city", "street")


def _money(amount: float) -> float:
    return round(amount, 2)


def _company_address(address: AvataxCompanyAddress) -> dict[str, Any]:
    missing = [
        field
        for field in _REQUIRED_COMPANY_ADDRESS_FIELDS
        if not getattr(address, field)
    ]
    if missing:
        raise AvataxInvalidAddressError(missing)

    return {
        "line1": address.street,
        "line2": address.street2 or "",
        "city": address.city,
        "region": address.state,
        "postalCode": address.zip,
        "country": address.country,
    }


def _customer_address(address: TaxAddress) -> dict[str, Any]:
    return {
        "line1": address.street_address1,
        "line2": address.street_address2,
        "city": address.city,
        "region": address.country_area,
        "postalCode": address.postal_code,
        "country": address.country.code if address.country else "",
    }


class AvataxTransactionBuilder:
    """Builds transaction models for one provider connection.

    Args:
        config: The provider connection assigned to the checkout's channel.
    """

    def __init__(self, config: AvataxConnectionConfig) -> None:
        self._config = config

    def build(
        self, payload: CalculateTaxesPayload, today: date | None = None
    ) -> dict[str, Any]:
        """Build the request body for ``createoradjust``.

        Args:
            payload: A complete tax calculation payload (address present).
            today: Document date, defaults to the current UTC date.

        Returns:
            dict[str, Any]: ``{"createTransactionModel": {...}}``.

        Raises:
            AvataxInvalidAddressError: When the configured ship-from address
                is incomplete.
        """
        tax_base = payload.tax_base
        if tax_base.address is None:
            raise ValueError("Cannot build a transaction without a customer address")

        ship_from = _company_address(self._config.address)
        tax_included = tax_base.prices_entered_with_tax
        discount = _money(sum(item.amount.amount for item in tax_base.discounts))

        lines: list[dict[str, Any]] = [
            {
                "number": str(index),
                "quantity": line.quantity,
                "amount": _money(line.total_price.amount),
                "taxCode": line.source_line.tax_code or "",
                "itemCode": line.source_line.product_sku or "",
                "description": line.source_line.product_name or "",
                "taxIncluded": tax_included,
                "discounted": discount > 0,
            }
            for index, line in enumerate(tax_base.lines, start=1)
        ]
        if tax_base.shipping_price.amount != 0:
            lines.append(
                {
                    "number": str(len(lines) + 1),
                    "quantity": 1,
                    "amount": _money(tax_base.shipping_price.amount),
                    "taxCode": self._config.shipping_tax_code,
                    "itemCode": SHIPPING_ITEM_CODE,
                    "taxIncluded": tax_included,
                    # Discounts apply to products only
                    "discounted": False,
                }
            )

        user = tax_base.source_object.user
        model: dict[str, Any] = {
            "type": SALES_ORDER,
            "companyCode": self._config.company_code,
            "date": (today or datetime.now(UTC).date()).isoformat(),
            "customerCode": user.id if user else DEFAULT_CUSTOMER_CODE,
            "currencyCode": tax_base.currency,
            "commit": self._config.is_autocommit,
            "addresses": {
                "shipFrom": ship_from,
                "shipTo": _customer_address(tax_base.address),
            },
            "lines": lines,
            "discount": discount,
        }
        if user and user.email:
            model["email"] = user.email

        return {"createTransactionModel": model}
