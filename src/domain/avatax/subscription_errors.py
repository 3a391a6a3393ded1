"""Reporting of errors Saleor hit while resolving the webhook subscription.

Saleor still delivers the webhook when parts of the subscription query
failed (for example a permission missing on the app). The payload then
carries an ``errors`` list; such payloads are reported but processed anyway.
"""

from __future__ import annotations

from loguru import logger

from src.core.error_tracking import capture_exception
from src.domain.avatax.payload import CalculateTaxesPayload


class SubscriptionPayloadError(Exception):
    """Saleor reported errors while building the webhook payload."""


class SubscriptionPayloadErrorChecker:
    """Logs and reports subscription errors, never fails the request."""

    def check_payload(self, payload: CalculateTaxesPayload) -> None:
        if not payload.errors:
            return

        messages = [str(error.get("message", "")) for error in payload.errors]
        logger.warning(
            "Payload contains subscription errors",
            errors_count=len(messages),
            error_messages=messages,
        )
        joined = "; ".join(messages)
        capture_exception(
            SubscriptionPayloadError(f"Subscription payload errors: {joined}")
        )
