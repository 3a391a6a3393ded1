"""Configuration summary logging.

Helps support answer "how is this tenant set up?" from logs alone, without
ever printing credentials.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loguru import Logger

    from src.domain.avatax.app_config import AppConfig


class AppConfigurationLogger:
    """Logs a credential-free summary of an ``AppConfig``."""

    def __init__(self, log: Logger) -> None:
        self._log = log

    def log_configuration(self, config: AppConfig, channel_slug: str) -> None:
        """Log how the given channel is configured.

        Args:
            config: Extracted tenant configuration.
            channel_slug: Channel of the current checkout.
        """
        connection = config.get_connection_for_channel(channel_slug)
        summary: dict[str, object] = {
            "provider_connections_count": len(config.provider_connections),
            "channels_count": len(config.channels),
            "channel_configured": config.get_channel_config(channel_slug) is not None,
            "connection_resolved": connection is not None,
        }
        if connection is not None:
            summary.update(
                connection_id=connection.id,
                is_sandbox=connection.config.is_sandbox,
                is_autocommit=connection.config.is_autocommit,
                is_document_recording_enabled=(
                    connection.config.is_document_recording_enabled
                ),
                company_code=connection.config.company_code,
                ship_from_country=connection.config.address.country,
            )

        self._log.info("Received configuration", **summary)
