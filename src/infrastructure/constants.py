"""Infrastructure-related constants for outbound HTTP integrations."""

# Connection pool limits of the shared HTTP client
HTTP_MAX_CONNECTIONS = 100
HTTP_MAX_KEEPALIVE_CONNECTIONS = 20
HTTP_DEFAULT_TIMEOUT_SECONDS = 30.0

# Saleor GraphQL pagination
SALEOR_PAGE_SIZE = 100

# Typesense
TYPESENSE_API_KEY_HEADER = "X-TYPESENSE-API-KEY"
