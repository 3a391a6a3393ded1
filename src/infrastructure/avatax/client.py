"""AvaTax REST v2 client.

Only the transaction endpoint used for checkout tax calculation is
implemented. Errors returned by AvaTax carry a machine readable code in the
``error.code`` member of the body; they are raised as ``AvataxApiError`` so
that callers can sort them into expected and unexpected failures.
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.core.exceptions import ExternalServiceError
from src.core.observability import trace_operation
from src.core.types import JsonObject

AVATAX = "avatax"
CREATE_OR_ADJUST_PATH = "/api/v2/transactions/createoradjust"


class AvataxModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AvataxTransactionLineDetail(AvataxModel):
    rate: float = 0.0
    tax: float = 0.0


class AvataxTransactionLine(AvataxModel):
    line_number: str | None = None
    item_code: str | None = None
    line_amount: float = 0.0
    discount_amount: float = 0.0
    tax: float = 0.0
    tax_calculated: float = 0.0
    taxable_amount: float = 0.0
    tax_included: bool = False
    details: list[AvataxTransactionLineDetail] = Field(default_factory=list)


class AvataxTransaction(AvataxModel):
    """Subset of the AvaTax ``TransactionModel`` used to build responses."""

    code: str | None = None
    total_amount: float = 0.0
    total_tax: float = 0.0
    lines: list[AvataxTransactionLine] = Field(default_factory=list)


class AvataxApiError(ExternalServiceError):
    """AvaTax rejected a request.

    Args:
        code: AvaTax error code, e.g. ``InvalidAddress``.
        message: Message returned by AvaTax.
        status_code: HTTP status of the response.
        details: Raw ``error.details`` list.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.code = code
        self.details = details or []
        super().__init__(
            f"AvaTax error {code}: {message}",
            service=AVATAX,
            status_code=status_code,
            context={"code": code},
        )


class AvataxClient:
    """Client for one AvaTax account.

    Args:
        base_url: Sandbox or production API base URL.
        username: Account id or username.
        password: License key or password.
        http_client: Shared async HTTP client.
        timeout: Per-call timeout in seconds.
        client_identifier: Value for the ``X-Avalara-Client`` header.
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        http_client: httpx.AsyncClient,
        timeout: float,
        client_identifier: str,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._auth = httpx.BasicAuth(username, password)
        self._http_client = http_client
        self._timeout = timeout
        self._client_identifier = client_identifier

    async def create_or_adjust_transaction(
        self, model: JsonObject
    ) -> AvataxTransaction:
        """Create (or adjust an existing) transaction and return computed taxes.

        Args:
            model: ``CreateOrAdjustTransactionModel`` body.

        Returns:
            AvataxTransaction: The computed transaction.

        Raises:
            AvataxApiError: When AvaTax answers with an error status.
            httpx.HTTPError: On transport failures.
        """
        company_code = model.get("createTransactionModel", {}).get("companyCode", "")
        with trace_operation(
            "avatax.create_or_adjust_transaction", company_code=company_code
        ):
            response = await self._http_client.post(
                f"{self.base_url}{CREATE_OR_ADJUST_PATH}",
                json=model,
                auth=self._auth,
                headers={"X-Avalara-Client": self._client_identifier},
                timeout=self._timeout,
            )

        if response.is_error:
            raise _api_error_from_response(response)

        transaction = AvataxTransaction.model_validate(response.json())
        logger.debug(
            "AvaTax transaction computed",
            transaction_code=transaction.code,
            total_tax=transaction.total_tax,
        )
        return transaction


def _api_error_from_response(response: httpx.Response) -> AvataxApiError:
    """Build an ``AvataxApiError`` from an error response body."""
    try:
        error = response.json().get("error") or {}
    except ValueError:
        error = {}

    return AvataxApiError(
        code=error.get("code") or f"HTTP{response.status_code}",
        message=error.get("message") or response.reason_phrase,
        status_code=response.status_code,
        details=error.get("details"),
    )
