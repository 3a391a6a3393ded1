"""Core infrastructure package for shared application functionality.

- **config**: Centralized configuration management with environment support
- **context**: Request context with correlation IDs and tenant tracking
- **exceptions**: Structured exception hierarchy with error codes
- **error_context**: Sensitive data sanitization for safe logging
- **error_tracking**: Sentry setup and exception reporting
- **logging**: Structured logging with cloud provider integrations
- **observability**: Distributed tracing with OpenTelemetry
- **result**: ``Ok`` / ``Err`` values for expected failures
- **types**: Type aliases for JSON payloads
"""
