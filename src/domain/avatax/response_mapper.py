"""Mapping of an AvaTax transaction onto Saleor's sync tax response."""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.domain.avatax.transaction_builder import SHIPPING_ITEM_CODE
from src.infrastructure.avatax import AvataxTransaction, AvataxTransactionLine

PERCENT = 100


class TaxLineComputation(BaseModel):
    total_gross_amount: float
    total_net_amount: float
    tax_rate: float


class TaxComputation(BaseModel):
    """Response body Saleor expects from ``CHECKOUT_CALCULATE_TAXES``.

    Rates are percentages (23 means 23%).
    """

    shipping_price_gross_amount: float = 0.0
    shipping_price_net_amount: float = 0.0
    shipping_tax_rate: float = 0.0
    lines: list[TaxLineComputation] = Field(default_factory=list)


def _rate(line: AvataxTransactionLine) -> float:
    return round(sum(detail.rate for detail in line.details) * PERCENT, 4)


def _amounts(
    line: AvataxTransactionLine, prices_entered_with_tax: bool
) -> tuple[float, float]:
    """Return (gross, net) of a transaction line."""
    tax = line.tax_calculated
    if prices_entered_with_tax:
        gross = line.line_amount - line.discount_amount
        return round(gross, 2), round(gross - tax, 2)
    net = line.taxable_amount
    return round(net + tax, 2), round(net, 2)


def build_response(
    transaction: AvataxTransaction, prices_entered_with_tax: bool
) -> TaxComputation:
    """Convert the computed transaction into a ``TaxComputation``.

    Product lines keep the order they were sent in; the shipping line, when
    present, fills the shipping fields.
    """
    response = TaxComputation()
    lines: list[TaxLineComputation] = []

    for line in transaction.lines:
        gross, net = _amounts(line, prices_entered_with_tax)
        if line.item_code == SHIPPING_ITEM_CODE:
            response = response.model_copy(
                update={
                    "shipping_price_gross_amount": gross,
                    "shipping_price_net_amount": net,
                    "shipping_tax_rate": _rate(line),
                }
            )
            continue
        lines.append(
            TaxLineComputation(
                total_gross_amount=gross, total_net_amount=net, tax_rate=_rate(line)
            )
        )

    return response.model_copy(update={"lines": lines})
