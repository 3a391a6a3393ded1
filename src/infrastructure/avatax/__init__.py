"""AvaTax REST client."""

from src.infrastructure.avatax.client import (
    AvataxApiError,
    AvataxClient,
    AvataxTransaction,
    AvataxTransactionLine,
)

__all__ = [
    "AvataxApiError",
    "AvataxClient",
    "AvataxTransaction",
    "AvataxTransactionLine",
]
