"""Webhook signature verification."""

import hashlib
import hmac


def compute_signature(secret: str, body: bytes) -> str:
    """HMAC-SHA256 of ``body`` keyed by ``secret``, hex encoded."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def verify_signature(secret: str, body: bytes, signature: str | None) -> bool:
    """Check a ``saleor-signature`` header against the raw request body.

    Args:
        secret: Shared webhook secret.
        body: Raw request body, exactly as received.
        signature: Hex digest sent by Saleor.

    Returns:
        bool: True when the signature matches.
    """
    if not signature:
        return False
    return hmac.compare_digest(compute_signature(secret, body), signature.lower())
