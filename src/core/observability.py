"""Distributed tracing with OpenTelemetry and pluggable exporters.

Spans are created for every inbound request (FastAPI instrumentation) and
for every outbound call to Saleor, AvaTax and Typesense (``trace_operation``).
Webhook attributes such as the Saleor version and checkout id are attached
to the active span with ``add_span_attributes``.

Exporters:
- Local development (spans logged through Loguru)
- Cloud providers (GCP Cloud Trace, AWS X-Ray via OTLP)
- Self-hosted (Jaeger, Tempo via OTLP)
"""

from __future__ import annotations

import importlib
import os
from contextlib import contextmanager
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Final

from loguru import logger
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import ReadableSpan, TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    SpanExporter,
    SpanExportResult,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from opentelemetry.trace import Status, StatusCode

from src.core.context import RequestContext

if TYPE_CHECKING:
    from collections.abc import Generator, Sequence

    from fastapi import FastAPI

    from src.core.config import Settings

SERVICE_NAME_KEY: Final[str] = "service.name"
SERVICE_VERSION_KEY: Final[str] = "service.version"
ENVIRONMENT_KEY: Final[str] = "deployment.environment"


class ObservabilityAttributes:
    """Attribute names shared by spans, log context and Sentry tags."""

    SALEOR_VERSION: Final[str] = "saleor.version"
    SALEOR_API_URL: Final[str] = "saleor.api_url"
    CHANNEL_SLUG: Final[str] = "channel_slug"
    CHECKOUT_ID: Final[str] = "checkout_id"
    CORRELATION_ID: Final[str] = "correlation_id"


class LoguruSpanExporter(SpanExporter):
    """Span exporter that writes finished spans through the Loguru logger."""

    NOISY_SPANS: Final[frozenset[str]] = frozenset(
        {"connect", "http send", "http receive"}
    )

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        """Log each finished span at DEBUG level."""
        for span in spans:
            span_context = span.get_span_context()
            if not span_context or span.name in self.NOISY_SPANS:
                continue

            attributes = dict(span.attributes or {})
            duration_ms = None
            if span.end_time and span.start_time:
                duration_ms = (span.end_time - span.start_time) // 1_000_000

            logger.bind(
                trace_id=f"0x{span_context.trace_id:032x}",
                span_id=f"0x{span_context.span_id:016x}",
                correlation_id=attributes.get(
                    ObservabilityAttributes.CORRELATION_ID,
                    RequestContext.get_correlation_id(),
                ),
                span_name=span.name,
                duration_ms=duration_ms,
                attributes=attributes,
                status=span.status.status_code.name,
            ).debug("Trace span completed: {}", span.name)

        return SpanExportResult.SUCCESS


def get_span_exporter(settings: Settings) -> SpanExporter | None:
    """Get the span exporter selected in configuration.

    Args:
        settings: Application settings.

    Returns:
        SpanExporter | None: Configured exporter or None if disabled.
    """
    exporter_type = settings.observability_config.exporter_type.lower()

    if exporter_type == "console":
        logger.info("Using Loguru span exporter for development")
        return LoguruSpanExporter()

    if exporter_type == "gcp":
        return _get_gcp_exporter(settings)

    if exporter_type in ("aws", "otlp"):
        endpoint = (
            settings.observability_config.exporter_endpoint or "http://localhost:4317"
        )
        logger.info("Using {} span exporter at {}", exporter_type, endpoint)
        return OTLPSpanExporter(
            endpoint=endpoint,
            insecure=settings.environment == "development",
        )

    logger.info("Tracing exporter disabled")
    return None


def _get_gcp_exporter(settings: Settings) -> SpanExporter | None:
    """Get the GCP Cloud Trace exporter, which is an optional dependency."""
    project_id = settings.observability_config.gcp_project_id or os.getenv(
        "GOOGLE_CLOUD_PROJECT"
    )
    if not project_id:
        logger.warning("GCP project ID not configured, disabling tracing")
        return None

    try:
        module = importlib.import_module("opentelemetry.exporter.cloud_trace")
    except ImportError:
        logger.error(
            "GCP exporter requested but opentelemetry-exporter-gcp-trace "
            "is not installed"
        )
        return None

    logger.info("Using GCP Cloud Trace exporter for project {}", project_id)
    exporter: SpanExporter = module.CloudTraceSpanExporter(project_id=project_id)
    return exporter


@lru_cache(maxsize=1)
def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer instance for the given component."""
    return trace.get_tracer(name)


def setup_tracing(settings: Settings) -> None:
    """Install the global tracer provider.

    Args:
        settings: Application settings.
    """
    if not settings.observability_config.enable_tracing:
        logger.info("Tracing disabled by configuration")
        return

    resource = Resource.create(
        {
            SERVICE_NAME_KEY: settings.app_name,
            SERVICE_VERSION_KEY: settings.app_version,
            ENVIRONMENT_KEY: settings.environment,
        }
    )
    tracer_provider = TracerProvider(
        resource=resource,
        sampler=TraceIdRatioBased(settings.observability_config.trace_sample_rate),
    )

    if exporter := get_span_exporter(settings):
        tracer_provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(tracer_provider)

    logger.info(
        "Tracing configured",
        exporter_type=settings.observability_config.exporter_type,
        sample_rate=settings.observability_config.trace_sample_rate,
    )


def instrument_app(app: FastAPI, settings: Settings) -> None:
    """Instrument the FastAPI application for tracing.

    Args:
        app: FastAPI application to instrument.
        settings: Application settings.
    """
    if not settings.observability_config.enable_tracing:
        return

    FastAPIInstrumentor.instrument_app(
        app,
        excluded_urls="/health,/docs,/redoc,/openapi.json",
        server_request_hook=add_correlation_id_to_span,
    )
    logger.info("Application instrumented for tracing")


def add_correlation_id_to_span(span: trace.Span, scope: dict[str, Any]) -> None:
    """Server request hook adding correlation and tenant ids to the request span.

    Args:
        span: The current span.
        scope: ASGI scope dict containing request information.
    """
    if not span or not span.is_recording():
        return

    if correlation_id := RequestContext.get_correlation_id():
        span.set_attribute(ObservabilityAttributes.CORRELATION_ID, correlation_id)

    headers = dict(scope.get("headers", []))
    if saleor_api_url := headers.get(b"saleor-api-url", b"").decode("utf-8"):
        span.set_attribute(ObservabilityAttributes.SALEOR_API_URL, saleor_api_url)


def add_span_attributes(**attributes: str | int | float | bool | None) -> None:
    """Add attributes to the current span, skipping ``None`` values.

    Args:
        **attributes: Key-value pairs to add as span attributes.
    """
    span = trace.get_current_span()
    if span and span.is_recording():
        for key, value in attributes.items():
            if value is not None:
                span.set_attribute(key, str(value))


@contextmanager
def trace_operation(
    name: str, **attributes: str | int | float | bool
) -> Generator[trace.Span]:
    """Trace a custom operation, such as an outbound HTTP call.

    Exceptions escaping the block are recorded on the span and re-raised.

    Args:
        name: Operation name for the span.
        **attributes: Initial attributes for the span.

    Yields:
        Generator[trace.Span]: The created span for the operation.

    Example:
        >>> with trace_operation("avatax.create_transaction", company="DEFAULT"):
        ...     response = await client.post(url, json=body)
    """
    tracer = get_tracer(__name__)
    with tracer.start_as_current_span(name, record_exception=False) as span:
        for key, value in attributes.items():
            span.set_attribute(key, str(value))

        if correlation_id := RequestContext.get_correlation_id():
            span.set_attribute(ObservabilityAttributes.CORRELATION_ID, correlation_id)

        try:
            yield span
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, type(exc).__name__))
            raise
