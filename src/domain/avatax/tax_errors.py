"""AvaTax failures the tax flow treats as expected."""

from __future__ import annotations

from typing import Any

from src.core.exceptions import ConfigurationError

INVALID_APP_ADDRESS_MESSAGE = (
    "InvalidAppAddressError: Check address in app configuration"
)

# AvaTax error codes caused by the checkout data rather than by the app:
# the customer can fix them (address) or the merchant must (tax codes).
KNOWN_AVATAX_ERROR_CODES = frozenset(
    {
        "InvalidAddress",
        "AddressRangeError",
        "AddressIncomplete",
        "AddressUnknownStreet",
        "AddressNotGeocoded",
        "InvalidZipForStateError",
        "InvalidPostalCode",
        "GetTaxError",
        "TaxCodeNotFound",
        "InvalidTaxCode",
        "MissingLine",
    }
)

# HTTP statuses with which AvaTax rejects the account credentials.
CREDENTIAL_REJECTION_STATUSES = frozenset({401, 403})


class AvataxInvalidAddressError(ConfigurationError):
    """The ship-from address stored in the app configuration is incomplete.

    Raised while building the transaction, outside the use case's ``Result``
    channel: the merchant has to fix the configuration, no retry by Saleor
    will help.
    """

    def __init__(
        self,
        missing_fields: list[str],
        context: dict[str, Any] | None = None,
    ) -> None:
        self.missing_fields = missing_fields
        super().__init__(
            INVALID_APP_ADDRESS_MESSAGE,
            context={"missing_fields": missing_fields, **(context or {})},
        )
