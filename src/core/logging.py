"""Structured logging with Loguru.

The service runs behind Saleor's webhook dispatcher, so every log line has
to be attributable to a tenant and a checkout. This module configures Loguru
once per process and offers helpers for binding webhook context.

Formatter types:
- **console**: Human-readable with inline context (development)
- **json**: Generic structured format (self-hosted)
- **gcp**: Google Cloud Logging format with trace integration
- **aws**: CloudWatch Logs Insights optimized format

Standard library logging (uvicorn, httpx) is intercepted and forwarded to
Loguru so that all output shares one format.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Final, cast

from loguru import logger

from src.core.config import get_settings

if TYPE_CHECKING:
    from src.core.config import Settings


class _LoggingState:
    """Tracks whether logging has been configured for this process."""

    def __init__(self) -> None:
        self.configured = False


_state = _LoggingState()

DEFAULT_LOG_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "{message}"
)
CORRELATION_ID_DISPLAY_LENGTH: Final[int] = 8
MAX_FIELD_VALUE_LENGTH: Final[int] = 100

# Shown first, in this order, by the console formatter
PRIORITY_FIELDS: Final[tuple[str, ...]] = (
    "correlation_id",
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "saleor_api_url",
    "channel_slug",
    "checkout_id",
)


def _escape_braces(value: object) -> str:
    return str(value).replace("{", "{{").replace("}", "}}")


def _format_field(key: str, value: object) -> str:
    """Format one extra field for the console formatter."""
    if key == "correlation_id":
        value = str(value)[:CORRELATION_ID_DISPLAY_LENGTH]
    elif key == "duration_ms":
        value = f"{value}ms"

    str_value = str(value)
    if key in get_settings().log_config.sensitive_fields:
        str_value = "[REDACTED]"
    elif len(str_value) > MAX_FIELD_VALUE_LENGTH:
        str_value = str_value[: MAX_FIELD_VALUE_LENGTH - 3] + "..."

    if key in PRIORITY_FIELDS:
        return _escape_braces(str_value)
    return f"{_escape_braces(key)}={_escape_braces(str_value)}"


def format_console_with_context(record: dict[str, Any]) -> str:
    """Format a log record for the console with all context fields visible.

    Args:
        record: Loguru record to format.

    Returns:
        str: Format string consumed by Loguru.
    """
    try:
        extra = record.get("extra", {})
        parts = [
            f"<green>{record['time'].strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]}</green>",
            f"<level>{record['level'].name: <8}</level>",
            f"<cyan>{record['name']}:{record['function']}:{record['line']}</cyan>",
        ]

        context_parts = [
            f"<yellow>{_format_field(key, extra[key])}</yellow>"
            for key in PRIORITY_FIELDS
            if extra.get(key) is not None
        ]
        context_parts.extend(
            f"<dim>{_format_field(key, value)}</dim>"
            for key, value in extra.items()
            if key not in PRIORITY_FIELDS
            and not key.startswith("_")
            and value is not None
        )
        if context_parts:
            parts.append(" ".join(f"[{part}]" for part in context_parts))

        parts.append(_escape_braces(record.get("message", "")))
        if record.get("exception"):
            parts.append("\n{exception}")

        return " | ".join(parts) + "\n"
    except (AttributeError, TypeError, ValueError, KeyError):
        return DEFAULT_LOG_FORMAT + "\n"


class InterceptHandler(logging.Handler):
    """Redirect standard library logging records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Forward log record to Loguru.

        Args:
            record: Standard library LogRecord to forward.
        """
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the caller outside of the logging module
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _base_entry(record: dict[str, Any]) -> dict[str, Any]:
    return {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
    }


def _public_extra(record: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in record.get("extra", {}).items() if not k.startswith("_")}


def serialize_for_json(record: dict[str, Any]) -> str:
    """Format a log record as generic JSON.

    Args:
        record: Loguru record to format.

    Returns:
        str: JSON-formatted log entry with newline.
    """
    log_entry = _base_entry(record)
    log_entry.update(_public_extra(record))

    if exc := record.get("exception"):
        log_entry["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }

    return json.dumps(log_entry, default=str) + "\n"


GCP_SEVERITY: Final[dict[str, str]] = {
    "TRACE": "DEBUG",
    "DEBUG": "DEBUG",
    "INFO": "INFO",
    "SUCCESS": "INFO",
    "WARNING": "WARNING",
    "ERROR": "ERROR",
    "CRITICAL": "CRITICAL",
}


def serialize_for_gcp(record: dict[str, Any]) -> str:
    """Format a log record for GCP Cloud Logging structured ingestion.

    Args:
        record: Loguru record to format.

    Returns:
        str: JSON-formatted log entry for GCP with newline.
    """
    settings = get_settings()
    extra = _public_extra(record)

    log_entry: dict[str, Any] = {
        "severity": GCP_SEVERITY.get(record["level"].name, "INFO"),
        "message": record["message"],
        "timestamp": record["time"].isoformat(),
        "serviceContext": {
            "service": settings.app_name,
            "version": settings.app_version,
        },
    }

    labels = {"function": record["function"], "line": str(record["line"])}
    if correlation_id := extra.pop("correlation_id", None):
        log_entry["logging.googleapis.com/trace"] = correlation_id
    if request_id := extra.pop("request_id", None):
        labels["request_id"] = request_id
    if extra:
        log_entry["jsonPayload"] = extra
    log_entry["logging.googleapis.com/labels"] = labels

    if record.get("exception") or record["level"].name in ("ERROR", "CRITICAL"):
        log_entry["logging.googleapis.com/sourceLocation"] = {
            "file": record["file"].path,
            "line": str(record["line"]),
            "function": record["function"],
        }

    return json.dumps(log_entry, default=str) + "\n"


def serialize_for_aws(record: dict[str, Any]) -> str:
    """Format a log record for AWS CloudWatch Logs Insights.

    Args:
        record: Loguru record to format.

    Returns:
        str: JSON-formatted log entry for AWS with newline.
    """
    log_entry = _base_entry(record)
    extra = _public_extra(record)

    if correlation_id := extra.pop("correlation_id", None):
        log_entry["traceId"] = correlation_id
    if request_id := extra.pop("request_id", None):
        log_entry["requestId"] = request_id
    for key, value in extra.items():
        log_entry.setdefault(key, value)

    if exc := record.get("exception"):
        log_entry["error"] = {
            "type": exc.type.__name__ if exc.type else None,
            "message": str(exc.value) if exc.value else None,
        }

    return json.dumps(log_entry, default=str) + "\n"


LOG_FORMATTERS: dict[str, Callable[[dict[str, Any]], str] | None] = {
    "console": None,
    "json": serialize_for_json,
    "gcp": serialize_for_gcp,
    "aws": serialize_for_aws,
}


def setup_logging(settings: Settings) -> None:
    """Configure Loguru with the formatter selected in settings.

    Calling it more than once is a no-op.

    Args:
        settings: Application settings containing log configuration.
    """
    if _state.configured:
        return

    logger.remove()

    formatter_type = settings.log_config.log_formatter_type or "console"
    formatter = LOG_FORMATTERS.get(formatter_type)

    if formatter is None:
        logger.add(
            sys.stdout,
            format=cast("Any", format_console_with_context),
            level=settings.log_config.log_level,
            enqueue=True,
            colorize=True,
            diagnose=settings.debug,
            backtrace=settings.debug,
        )
    else:

        def structured_sink(message: object) -> None:
            """Write the record through the structured formatter."""
            record = getattr(message, "record", None)
            if record is not None:
                sys.stdout.write(formatter(record))
                sys.stdout.flush()

        logger.add(
            structured_sink,
            level=settings.log_config.log_level,
            enqueue=True,
            diagnose=False,
            backtrace=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        std_logger = logging.getLogger(logger_name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logger.info(
        "Logging configured with {} formatter",
        formatter_type,
        log_level=settings.log_config.log_level,
    )
    _state.configured = True


@contextmanager
def webhook_log_context(**fields: str | None) -> Generator[None]:
    """Bind webhook attributes (channel slug, checkout id...) to every log line.

    ``None`` values are dropped so optional attributes such as the Saleor
    version can be passed unconditionally.

    Example:
        >>> with webhook_log_context(channel_slug="default", checkout_id="Q2"):
        ...     logger.info("Calculating taxes")
    """
    with logger.contextualize(**{k: v for k, v in fields.items() if v is not None}):
        yield
