"""Request context middleware for correlation and tenant tracking.

Every request gets a correlation ID (taken from ``X-Correlation-ID`` when
the caller sends one) and, when Saleor identifies itself with the
``saleor-api-url`` header, the tenant's API URL. Both are stored in
contextvars and bound to Loguru for the lifetime of the request.
"""

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.api.constants import CORRELATION_ID_HEADER
from src.core.constants import SALEOR_API_URL_HEADER
from src.core.context import RequestContext, generate_correlation_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to manage request context and correlation IDs."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process the request with context management.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint.

        Returns:
            Response: Response with correlation ID header.
        """
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
        RequestContext.set_correlation_id(correlation_id)

        context: dict[str, str] = {"correlation_id": correlation_id}
        if saleor_api_url := request.headers.get(SALEOR_API_URL_HEADER):
            RequestContext.set_saleor_api_url(saleor_api_url)
            context["saleor_api_url"] = saleor_api_url

        try:
            with logger.contextualize(**context):
                response = await call_next(request)
                response.headers[CORRELATION_ID_HEADER] = correlation_id
                return response
        finally:
            RequestContext.clear()
