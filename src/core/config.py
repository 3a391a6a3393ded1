"""Centralized configuration management with environment-aware defaults.

This module implements the configuration system using Pydantic Settings,
providing type-safe configuration with validation, environment variable
support, and cloud provider auto-detection.

Features:
- **Type safety**: All configuration values are validated and typed
- **Environment variables**: Supports .env files and environment overrides
- **Nested configuration**: Uses __ delimiter for complex config structures
- **Auto-detection**: Automatically detects cloud environments (GCP, AWS)
- **Caching**: Configuration is cached for performance

Configuration sources (in order of precedence):
1. Environment variables
2. .env file in project root
3. Default values in model definitions
4. Environment-based defaults (production vs development)

Per-tenant configuration (AvaTax credentials, Typesense hosts) is NOT part of
these settings: it lives in Saleor private metadata and is loaded per request.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogConfig(BaseModel):
    """Simplified logging configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_formatter_type: Literal["console", "json", "gcp", "aws"] | None = Field(
        default=None,
        description="Log output formatter. Auto-detected if not specified.",
    )
    excluded_paths: list[str] = Field(
        default_factory=lambda: ["/health", "/metrics"],
        description="Paths to exclude from request logging",
    )
    slow_request_threshold_ms: int = Field(
        default=1000,
        gt=0,
        description="Threshold for slow request warnings (milliseconds)",
    )
    sensitive_fields: list[str] = Field(
        default_factory=lambda: [
            "password",
            "token",
            "secret",
            "api_key",
            "apikey",
            "authorization",
            "credentials",
        ],
        description="Field names to redact",
    )


class ObservabilityConfig(BaseModel):
    """Cloud-agnostic observability configuration."""

    enable_tracing: bool = Field(
        default=True,
        description="Enable OpenTelemetry tracing",
    )
    exporter_type: Literal["console", "gcp", "aws", "otlp", "none"] = Field(
        default="console",
        description="Trace exporter type. Defaults to console for development.",
    )
    exporter_endpoint: str | None = Field(
        default=None,
        description="OTLP exporter endpoint (for OTLP/AWS exporters)",
    )
    gcp_project_id: str | None = Field(
        default=None,
        description="GCP project ID (only for GCP exporter)",
    )
    trace_sample_rate: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Trace sampling rate (0.0 to 1.0)",
    )

    @field_validator("exporter_endpoint", "gcp_project_id", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for nullable fields."""
        if v == "":
            return None
        return v


class SentryConfig(BaseModel):
    """Error tracking configuration."""

    dsn: str | None = Field(
        default=None,
        description="Sentry DSN. Error tracking is disabled when not set.",
    )
    traces_sample_rate: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Sentry performance sampling rate (tracing is done with OTel)",
    )
    send_default_pii: bool = Field(
        default=False,
        description="Whether Sentry may attach request bodies and user data",
    )

    @field_validator("dsn", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for nullable fields."""
        if v == "":
            return None
        return v


class SaleorConfig(BaseModel):
    """Settings for talking to Saleor instances."""

    webhook_secret: str | None = Field(
        default=None,
        description=(
            "Shared secret used to verify the saleor-signature header. "
            "Verification is skipped in development when unset."
        ),
    )
    apl_file_path: Path = Field(
        default=Path(".saleor-app-auth.json"),
        description="Location of the file based auth persistence layer",
    )
    graphql_timeout: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Timeout in seconds for Saleor GraphQL calls",
    )


class AvataxConfig(BaseModel):
    """Settings for the AvaTax REST API (per-tenant credentials live in metadata)."""

    production_base_url: str = Field(
        default="https://rest.avatax.com",
        description="AvaTax production API base URL",
    )
    sandbox_base_url: str = Field(
        default="https://sandbox-rest.avatax.com",
        description="AvaTax sandbox API base URL",
    )
    request_timeout: float = Field(
        default=15.0,
        gt=0,
        le=120,
        description="Timeout in seconds for AvaTax calls",
    )
    client_identifier: str = Field(
        default="saleor-app-bridge; 0.1.0; Python; 1.0; avatax",
        description="Value sent in the X-Avalara-Client header",
    )


class TypesenseConfig(BaseModel):
    """Settings shared by all Typesense tenants."""

    collection_name: str = Field(
        default="saleor_products_variants",
        description="Collection that product variant documents are imported into",
    )
    import_batch_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Number of products uploaded per import request",
    )


class Settings(BaseSettings):
    """Main settings class for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        env_nested_delimiter="__",
    )

    # Application settings
    app_name: str = Field(default="Saleor App Bridge", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment the application is running in",
    )
    debug: bool = Field(default=True, description="Debug mode flag")

    # API settings
    api_host: str = Field(default="127.0.0.1", description="API host")
    api_port: int = Field(default=8000, description="API port")
    docs_url: str | None = Field(default="/docs", description="Swagger UI URL")
    redoc_url: str | None = Field(default="/redoc", description="ReDoc URL")
    openapi_url: str | None = Field(
        default="/openapi.json", description="OpenAPI schema URL"
    )

    log_config: LogConfig = Field(
        default_factory=LogConfig, description="Logging configuration"
    )
    observability_config: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig, description="Observability configuration"
    )
    sentry_config: SentryConfig = Field(
        default_factory=SentryConfig, description="Error tracking configuration"
    )
    saleor_config: SaleorConfig = Field(
        default_factory=SaleorConfig, description="Saleor connection configuration"
    )
    avatax_config: AvataxConfig = Field(
        default_factory=AvataxConfig, description="AvaTax API configuration"
    )
    typesense_config: TypesenseConfig = Field(
        default_factory=TypesenseConfig, description="Typesense import configuration"
    )

    def model_post_init(self, __context: object) -> None:
        """Post initialization to set environment-based defaults."""
        super().model_post_init(__context)

        if self.log_config.log_formatter_type is None:
            self.log_config.log_formatter_type = self._detect_formatter()

        if self.environment == "production":
            if self.observability_config.exporter_type == "console":
                self.observability_config.exporter_type = self._detect_exporter()
            if self.observability_config.trace_sample_rate == 1.0:
                self.observability_config.trace_sample_rate = 0.1

    def _detect_formatter(self) -> Literal["console", "json", "gcp", "aws"]:
        """Auto-detect log formatter based on environment."""
        if os.getenv("K_SERVICE"):  # Cloud Run
            return "gcp"
        if os.getenv("AWS_EXECUTION_ENV"):
            return "aws"

        if self.environment == "development":
            return "console"
        return "json"

    def _detect_exporter(self) -> Literal["console", "gcp", "aws", "otlp", "none"]:
        """Auto-detect trace exporter based on environment."""
        if os.getenv("K_SERVICE"):  # Cloud Run
            return "gcp"
        if os.getenv("AWS_EXECUTION_ENV"):
            return "aws"

        if self.environment == "development":
            return "console"
        return "otlp"

    @property
    def verify_webhook_signatures(self) -> bool:
        """Whether inbound webhooks must carry a valid signature.

        Signatures are always required outside development; in development
        they are checked only when a secret is configured.
        """
        if self.environment != "development":
            return True
        return self.saleor_config.webhook_secret is not None

    @field_validator("docs_url", "redoc_url", "openapi_url", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for nullable fields."""
        _ = cls
        if v == "":
            return None
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
