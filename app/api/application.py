"""FastAPI application factory for the reporting service.

This module defines middleware, exception handling and route composition.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import AppSettings
from app.domain import AppMetadata
from app.metrics import SystemMetricsPort

from .errors import api_register_exception_handlers
from .middleware import AccessLogMiddleware, SecurityHeadersMiddleware
from .routers import api_create_health_router, api_create_info_router, api_create_load_router

logger = logging.getLogger(__name__)


def create_api_application(settings: AppSettings, metrics_probe: SystemMetricsPort) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        metrics_probe: System metrics port sampled by reporting endpoints.

    Returns:
        FastAPI: Framework application instance with middleware and routes.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")

    metadata = AppMetadata(
        application_name=settings.application_name,
        version=settings.version,
        cloud_provider=settings.cloud_provider,
        environment_name=settings.environment,
    )

    @asynccontextmanager
    async def lifespan(_application: FastAPI) -> AsyncIterator[None]:
        logger.info("Multi-Cloud App server running on port %d", settings.port)
        logger.info("Environment: %s", metadata.environment_name)
        logger.info("Cloud Provider: %s", metadata.cloud_provider)
        logger.info("Health check available at: http://localhost:%d/health", settings.port)
        yield
        logger.info("Multi-Cloud App server stopped")

    application = FastAPI(title=settings.application_name, version=metadata.version, lifespan=lifespan)

    # Error middleware goes in first so it sits innermost; the last added runs
    # outermost so the access log sees the final status and headers.
    api_register_exception_handlers(application, metadata)
    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(AccessLogMiddleware)

    application.include_router(api_create_info_router(metadata=metadata, metrics_probe=metrics_probe))
    application.include_router(api_create_health_router(metadata=metadata, metrics_probe=metrics_probe))
    application.include_router(api_create_load_router(settings=settings, metadata=metadata))

    return application
