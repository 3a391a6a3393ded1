"""Unit tests for src/core/security.py."""

import hashlib
import hmac

import pytest

from src.core.security import compute_signature, verify_signature

BODY = b'{"taxBase": {}}'


@pytest.mark.unit
class TestWebhookSignature:
    """Test cases for saleor-signature verification."""

    def test_compute_signature_is_hex_hmac_sha256(self) -> None:
        """The signature is the hex HMAC-SHA256 of the raw body."""
        expected = hmac.new(b"secret", BODY, hashlib.sha256).hexdigest()

        assert compute_signature("secret", BODY) == expected

    def test_valid_signature(self) -> None:
        """A signature computed with the same secret is accepted."""
        assert verify_signature("secret", BODY, compute_signature("secret", BODY))

    def test_signature_comparison_ignores_case(self) -> None:
        """Upper case hex digests are accepted."""
        signature = compute_signature("secret", BODY).upper()

        assert verify_signature("secret", BODY, signature)

    @pytest.mark.parametrize("signature", [None, "", "deadbeef"])
    def test_invalid_signature(self, signature: str | None) -> None:
        """Missing or wrong signatures are rejected."""
        assert not verify_signature("secret", BODY, signature)

    def test_tampered_body(self) -> None:
        """A signature does not validate a different body."""
        signature = compute_signature("secret", BODY)

        assert not verify_signature("secret", BODY + b" ", signature)
