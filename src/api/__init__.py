"""HTTP API layer of the Saleor apps.

Key components:
- **main**: Application factory and lifecycle management
- **dependencies**: Webhook verification, dashboard authentication and
  service wiring injected into the routes
- **routes**: Saleor facing endpoints
  - AvaTax checkout tax calculation webhook
  - Typesense webhook status and catalogue import
- **middleware**: Cross-cutting concerns for all requests
  - Request context with correlation ID and tenant tracking
  - Structured logging with timing
  - Centralized error handling with consistent responses
- **schemas**: Pydantic models for responses
- **utils**: orjson response class

Saleor facing routes answer errors with ``{"message": ...}`` bodies, the
shape Saleor and the dashboard expect. Everything else that escapes a
route is rendered by the global exception handlers as ``ErrorResponse``.
"""
