"""Entry point for running the Saleor apps service with uvicorn."""

import os
from typing import Any

import uvicorn
from loguru import logger

from src.core.config import get_settings
from src.core.logging import setup_logging

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def uvicorn_log_config() -> dict[str, Any]:
    """Route uvicorn's stdlib loggers into Loguru."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "handlers": {"default": {"class": "src.core.logging.InterceptHandler"}},
        "loggers": {
            name: {"handlers": ["default"], "level": "INFO", "propagate": False}
            for name in _UVICORN_LOGGERS
        },
    }


def main() -> None:
    """Start the server."""
    settings = get_settings()
    setup_logging(settings)

    # Cloud Run and most PaaS inject the listening port
    port = int(os.environ.get("PORT", settings.api_port))
    reload = settings.environment == "development" and settings.debug

    logger.info(
        "Starting Uvicorn on http://{}:{} ({})",
        settings.api_host,
        port,
        "auto-reload" if reload else settings.environment,
    )
    uvicorn.run(
        "src.api.main:app",
        host=settings.api_host,
        port=port,
        reload=reload,
        log_config=uvicorn_log_config(),
    )


if __name__ == "__main__":
    main()
