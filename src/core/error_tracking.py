"""Error tracking with Sentry.

Unexpected failures in webhook handlers are reported here exactly once, at
the handler boundary. When no DSN is configured the Sentry SDK is never
initialised and every call below becomes a no-op inside the SDK itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import sentry_sdk
from loguru import logger
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.loguru import LoguruIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

if TYPE_CHECKING:
    from src.core.config import Settings


def setup_error_tracking(settings: Settings) -> bool:
    """Initialise the Sentry SDK.

    Args:
        settings: Application settings.

    Returns:
        bool: True when Sentry was initialised.
    """
    sentry = settings.sentry_config
    if not sentry.dsn:
        logger.info("Sentry DSN not configured, error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=sentry.dsn,
        environment=settings.environment,
        release=f"{settings.app_name}@{settings.app_version}",
        traces_sample_rate=sentry.traces_sample_rate,
        send_default_pii=sentry.send_default_pii,
        integrations=[
            StarletteIntegration(),
            FastApiIntegration(),
            # Loguru ERROR lines become breadcrumbs, not duplicate events
            LoguruIntegration(event_level=None),
        ],
    )
    logger.info("Error tracking configured", environment=settings.environment)
    return True


def capture_exception(error: BaseException) -> str | None:
    """Report an exception to Sentry.

    Args:
        error: The exception to report.

    Returns:
        str | None: The Sentry event id, or None when tracking is disabled.
    """
    return sentry_sdk.capture_exception(error)


def set_tag(key: str, value: str) -> None:
    """Set a tag on the current Sentry scope."""
    sentry_sdk.set_tag(key, value)
