"""Unit tests for src/core/error_context.py."""

import pytest
from pytest_mock import MockType

from src.core.constants import REDACTED
from src.core.error_context import (
    is_sensitive_field,
    sanitize_dict,
    sanitize_error_context,
    sanitize_headers,
    sanitize_metadata,
)
from src.core.exceptions import ConfigurationError


@pytest.mark.unit
class TestSanitization:
    """Test cases for redaction of sensitive data."""

    @pytest.mark.parametrize(
        "field",
        ["password", "apiKey", "api_key", "AUTHORIZATION", "credentials", "token"],
    )
    def test_sensitive_fields(self, field: str) -> None:
        """Common credential field names are detected."""
        assert is_sensitive_field(field)

    @pytest.mark.parametrize("field", ["checkout_id", "channel_slug", "zip"])
    def test_regular_fields(self, field: str) -> None:
        """Ordinary field names are kept."""
        assert not is_sensitive_field(field)

    def test_configured_sensitive_fields(self, mock_get_settings: MockType) -> None:
        """Fields from settings are redacted on top of the defaults."""
        _ = mock_get_settings

        assert is_sensitive_field("custom_secret_value")
        assert is_sensitive_field("my_password")

    def test_nested_dict(self) -> None:
        """Nested credentials are redacted, other values kept."""
        data = {
            "config": {
                "companyCode": "DEFAULT",
                "credentials": {"username": "u", "password": "p"},
            },
            "items": [{"apiKey": "k", "host": "h"}],
        }

        assert sanitize_dict(data) == {
            "config": {"companyCode": "DEFAULT", "credentials": REDACTED},
            "items": [{"apiKey": REDACTED, "host": "h"}],
        }

    def test_headers(self) -> None:
        """Signature and token headers are redacted."""
        headers = {
            "saleor-signature": "abc",
            "authorization-bearer": "jwt",
            "saleor-event": "checkout_calculate_taxes",
        }

        assert sanitize_headers(headers) == {
            "saleor-signature": REDACTED,
            "authorization-bearer": REDACTED,
            "saleor-event": "checkout_calculate_taxes",
        }

    def test_metadata_values_are_always_redacted(self) -> None:
        """Metadata keys survive while every value is hidden."""
        items = [
            {"key": "provider-connections", "value": '[{"password": "p"}]'},
            {"key": "channel-configuration", "value": "[]"},
        ]

        assert sanitize_metadata(items) == [
            {"key": "provider-connections", "value": REDACTED},
            {"key": "channel-configuration", "value": REDACTED},
        ]

    def test_error_context(self) -> None:
        """Exception attributes and extra context are sanitized."""
        error = ConfigurationError("bad", context={"token": "t"})

        context = sanitize_error_context(error, {"password": "p", "slug": "s"})

        assert context["error_type"] == "ConfigurationError"
        assert context["password"] == REDACTED
        assert context["slug"] == "s"
        assert context["error_attributes"]["context"] == {"token": REDACTED}
        assert "stack_trace" not in context["error_attributes"]
