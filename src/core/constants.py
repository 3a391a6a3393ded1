"""Core application constants."""

# Time constants
MILLISECONDS_PER_SECOND = 1000

# Security and redaction
REDACTED = "[REDACTED]"

# Saleor webhook headers
SALEOR_API_URL_HEADER = "saleor-api-url"
SALEOR_EVENT_HEADER = "saleor-event"
SALEOR_SIGNATURE_HEADER = "saleor-signature"
SALEOR_AUTHORIZATION_BEARER_HEADER = "authorization-bearer"

# Saleor sync webhook events handled by this service
CHECKOUT_CALCULATE_TAXES_EVENT = "checkout_calculate_taxes"
