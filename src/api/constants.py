"""API-related constants."""

# HTTP Status Codes
HTTP_500_INTERNAL_SERVER_ERROR = 500

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Request logging
MAX_USER_AGENT_LENGTH = 200

# Response messages of the Saleor facing routes
UNHANDLED_ERROR_MESSAGE = "Unhandled error"
APP_NOT_CONFIGURED_MESSAGE = "App not configured"
