"""Error response schema of the global exception handlers.

Routes called by Saleor answer with ``{"message": ...}`` (see
``src.api.schemas.webhooks``); anything that escapes a route, such as a
failed request verification or an unexpected exception, is rendered with
``ErrorResponse`` so that operators get correlation and request IDs.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class ServiceInfo(BaseModel):
    """Service information for error context."""

    name: str = Field(
        ...,
        description="Name of the service",
        examples=["Saleor App Bridge"],
    )

    version: str = Field(
        ...,
        description="Version of the service",
        examples=["0.1.0"],
    )

    environment: str = Field(
        ...,
        description="Environment where the service is running",
        examples=["development", "staging", "production"],
    )


class ErrorResponse(BaseModel):
    """Standardized error response model for API errors."""

    error_code: str = Field(
        ...,
        description="Unique error code identifying the error type",
        examples=["VALIDATION_ERROR", "UNAUTHORIZED", "EXTERNAL_SERVICE_ERROR"],
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Invalid webhook signature", "Saleor instance is not registered"],
    )

    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error details (e.g., field-specific validation errors)",
        examples=[{"header": "saleor-signature"}],
    )

    correlation_id: str | None = Field(
        default=None,
        description="Request correlation ID for tracing and debugging",
        examples=["550e8400-e29b-41d4-a716-446655440000"],
    )

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp when the error occurred (with timezone)",
        examples=["2026-06-14T12:00:00+00:00"],
    )

    severity: str | None = Field(
        default=None,
        description="Error severity level (LOW, MEDIUM, HIGH, CRITICAL)",
        examples=["HIGH"],
    )

    service_info: ServiceInfo | None = Field(
        default=None,
        description="Information about the service that generated the error",
    )

    request_id: str | None = Field(
        default=None,
        description="Unique request identifier",
        examples=["req-550e8400-e29b-41d4-a716-446655440000"],
    )

    debug_info: dict[str, Any] | None = Field(
        default=None,
        description="Debug information (only populated in development environments)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error_code": "UNAUTHORIZED",
                    "message": "Invalid webhook signature",
                    "details": {"header": "saleor-signature"},
                    "correlation_id": "550e8400-e29b-41d4-a716-446655440000",
                    "request_id": "req-660e8400-e29b-41d4-a716-446655440000",
                    "timestamp": "2026-06-14T12:00:00+00:00",
                    "severity": "HIGH",
                    "service_info": {
                        "name": "Saleor App Bridge",
                        "version": "0.1.0",
                        "environment": "production",
                    },
                },
                {
                    "error_code": "EXTERNAL_SERVICE_ERROR",
                    "message": "Saleor responded with HTTP 502 to FetchOwnWebhooks",
                    "details": {"service": "saleor", "status_code": 502},
                    "timestamp": "2026-06-14T12:00:02+00:00",
                    "severity": "HIGH",
                },
            ]
        }
    }
