"""FastAPI application initialization and configuration module.

This module serves as the main entry point of the Saleor apps service.
It handles:
- Application lifecycle management (shared HTTP client shutdown)
- Error tracking and tracing setup
- Middleware registration in the correct order
- Exception handler registration
- Health check and info endpoints
- AvaTax and Typesense routers

Middleware are executed in reverse order of registration.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, FastAPI
from loguru import logger

from src.api.middleware.error_handler import register_exception_handlers
from src.api.middleware.request_context import RequestContextMiddleware
from src.api.middleware.request_logging import RequestLoggingMiddleware
from src.api.routes import avatax_router, typesense_router
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.error_tracking import setup_error_tracking
from src.core.logging import setup_logging
from src.core.observability import instrument_app, setup_tracing
from src.infrastructure.http import close_http_client


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app_instance: The FastAPI application instance.

    Yields:
        None: Nothing is yielded, this is just a lifespan context.
    """
    logger.info(
        "Application startup complete - {} v{}",
        app_instance.title,
        app_instance.version,
    )

    yield

    logger.info("Application shutdown initiated")
    await close_http_client()
    logger.info("Application shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings instance. If not provided, will use get_settings().

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    # Logging first so that the other setup steps are logged
    setup_logging(settings)
    setup_error_tracking(settings)
    setup_tracing(settings)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    # Register exception handlers BEFORE middleware
    register_exception_handlers(application)

    # 2. Request logging middleware (logs requests/responses)
    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)

    # 1. Request context middleware (correlation ID, tenant)
    application.add_middleware(RequestContextMiddleware)

    application.include_router(avatax_router)
    application.include_router(typesense_router)

    @application.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint for load balancers and orchestrators.

        Returns:
            dict[str, str]: The service status.
        """
        return {"status": "healthy"}

    @application.get("/info")
    async def info(
        app_settings: Annotated[Settings, Depends(get_settings)],
    ) -> dict[str, Any]:
        """Get application information.

        Args:
            app_settings: Application settings injected via dependency.

        Returns:
            dict[str, Any]: Application information including name, version,
                and environment.
        """
        return {
            "app_name": app_settings.app_name,
            "version": app_settings.app_version,
            "environment": app_settings.environment,
            "debug": app_settings.debug,
        }

    # Instrument application for tracing (at the end)
    instrument_app(application, settings)

    return application


app = create_app()
