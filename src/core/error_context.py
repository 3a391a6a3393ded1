"""Sensitive data sanitization for secure error logging and responses.

Webhook payloads carry tenant private metadata (AvaTax passwords, Typesense
API keys) and outbound calls carry bearer tokens. Everything that ends up in
a log line or an error report goes through the helpers in this module first.

Key features:
- **Pattern matching**: Regex-based detection of sensitive field names
- **Configurable fields**: Additional sensitive fields via configuration
- **Deep sanitization**: Recursive handling of nested data structures
- **Header protection**: Special handling for sensitive HTTP headers
- **Metadata protection**: Values of Saleor metadata entries are never logged

Sanitization is applied at logging time; the original data is never mutated.
"""

from __future__ import annotations

import re
from functools import lru_cache
from re import Pattern
from typing import Any, Final

from src.core.config import get_settings
from src.core.constants import REDACTED

SanitizableValue = (
    str | int | float | bool | None | dict[str, Any] | list[Any] | tuple[Any, ...]
)

SENSITIVE_HEADERS = {
    "authorization",
    "authorization-bearer",
    "cookie",
    "saleor-signature",
    "x-api-key",
    "x-typesense-api-key",
    "set-cookie",
    "proxy-authorization",
}

DEFAULT_SENSITIVE_PATTERN: Final[Pattern[str]] = re.compile(
    r"(password|passwd|pwd|secret|token|api[_-]?key|apikey|auth|authorization|"
    r"credential|private[_-]?key|access[_-]?key|secret[_-]?key|session|"
    r"card[_-]?number|connection[_-]?string)",
    re.IGNORECASE,
)

MAX_DEPTH: Final[int] = 10


@lru_cache(maxsize=1)
def _get_sensitive_fields() -> list[str]:
    """Get the configured sensitive fields from settings."""
    settings = get_settings()
    return settings.log_config.sensitive_fields


def is_sensitive_field(field_name: str) -> bool:
    """Check if a field name indicates sensitive data.

    Args:
        field_name: The field name to check.

    Returns:
        bool: True if the field appears to contain sensitive data.
    """
    if DEFAULT_SENSITIVE_PATTERN.search(field_name):
        return True

    field_lower = field_name.lower()
    return any(
        sensitive_field.lower() in field_lower
        for sensitive_field in _get_sensitive_fields()
    )


def is_sensitive_header(header_name: str) -> bool:
    """Check if a header name is sensitive (case-insensitive)."""
    return header_name.lower() in SENSITIVE_HEADERS


def sanitize_value(
    value: SanitizableValue, field_name: str = "", depth: int = 0
) -> SanitizableValue:
    """Sanitize a value if it appears to be sensitive.

    Nested dicts, lists and tuples are walked up to MAX_DEPTH.

    Args:
        value: The value to potentially sanitize.
        field_name: The field name for context.
        depth: Current recursion depth.

    Returns:
        SanitizableValue: Sanitized value or original if not sensitive.
    """
    if depth > MAX_DEPTH:
        return REDACTED

    if field_name and is_sensitive_field(field_name):
        return REDACTED

    if isinstance(value, dict):
        return {k: sanitize_value(v, k, depth + 1) for k, v in value.items()}

    if isinstance(value, list):
        return [sanitize_value(item, "", depth + 1) for item in value]

    if isinstance(value, tuple):
        return tuple(sanitize_value(item, "", depth + 1) for item in value)

    return value


def sanitize_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Sanitize a dictionary by redacting sensitive fields."""
    return {key: sanitize_value(value, key) for key, value in data.items()}


def sanitize_headers(headers: dict[str, str]) -> dict[str, str]:
    """Sanitize HTTP headers."""
    return {k: REDACTED if is_sensitive_header(k) else v for k, v in headers.items()}


def sanitize_metadata(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Replace the values of Saleor metadata entries, keeping the keys.

    Private metadata values are opaque JSON blobs holding credentials, so
    none of them are logged regardless of their key.

    Args:
        items: Metadata entries in ``{"key": ..., "value": ...}`` form.

    Returns:
        list[dict[str, Any]]: Entries with values redacted.
    """
    return [{"key": item.get("key"), "value": REDACTED} for item in items]


def sanitize_error_context(
    error: Exception, context: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Create sanitized error context for logging.

    Args:
        error: The exception to create context for.
        context: Additional context to include (will be sanitized).

    Returns:
        dict[str, Any]: Sanitized error context safe for logging.
    """
    error_context: dict[str, Any] = {
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if context:
        error_context.update(sanitize_dict(context))

    if hasattr(error, "__dict__"):
        error_attrs = {
            k: v
            for k, v in error.__dict__.items()
            if not k.startswith("_") and k != "stack_trace"
        }
        if error_attrs:
            error_context["error_attributes"] = sanitize_dict(error_attrs)

    return error_context
