"""FastAPI middleware package for cross-cutting request/response concerns.

- **RequestContextMiddleware**: Correlation IDs and tenant (Saleor API URL)
  context
- **RequestLoggingMiddleware**: Structured logging with timing and slow
  request detection
- **error_handler**: Global exception handlers producing ``ErrorResponse``

Middleware run in reverse order of registration: request context is added
last so that the correlation ID exists before the request is logged.
"""
