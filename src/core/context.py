"""Request context management for correlation IDs and tenant tracking."""

import uuid
from contextvars import ContextVar

# Context variables survive across await points within one request task
_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_saleor_api_url_var: ContextVar[str | None] = ContextVar("saleor_api_url", default=None)


class RequestContext:
    """Async-safe storage for request-scoped identifiers.

    Holds the correlation ID of the HTTP request and the Saleor API URL of
    the tenant the request belongs to, so that logs, spans and error reports
    emitted deep in the call chain can be attributed without threading the
    values through every signature.
    """

    @staticmethod
    def set_correlation_id(correlation_id: str) -> None:
        """Set the correlation ID for the current context.

        Args:
            correlation_id: The correlation ID to store in the context.
        """
        _correlation_id_var.set(correlation_id)

    @staticmethod
    def get_correlation_id() -> str | None:
        """Get the correlation ID from the current context.

        Returns:
            str | None: The correlation ID if set, None otherwise.
        """
        return _correlation_id_var.get()

    @staticmethod
    def set_saleor_api_url(saleor_api_url: str) -> None:
        """Set the tenant's Saleor API URL for the current context."""
        _saleor_api_url_var.set(saleor_api_url)

    @staticmethod
    def get_saleor_api_url() -> str | None:
        """Get the tenant's Saleor API URL, if a tenant was resolved."""
        return _saleor_api_url_var.get()

    @staticmethod
    def clear() -> None:
        """Clear all context variables."""
        _correlation_id_var.set(None)
        _saleor_api_url_var.set(None)


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for request tracking.

    Returns:
        str: A string representation of a UUID4.
    """
    return str(uuid.uuid4())


def generate_request_id() -> str:
    """Generate a unique request ID for individual request tracking.

    Request IDs are unique per request, while correlation IDs can span
    multiple services (Saleor forwards its own request id).

    Returns:
        str: A prefixed UUID4 string in format 'req-<uuid4>'.

    Examples:
        >>> request_id = generate_request_id()
        >>> request_id.startswith('req-')
        True
    """
    return f"req-{uuid.uuid4()}"
