"""FastAPI application factory.

``create_app`` configures logging and tracing, registers the exception
handlers and middleware, mounts the feature routers under
``Settings.api_prefix`` and defines the unprefixed health and info endpoints.

Middleware execute in reverse order of registration, so a request passes
through CORS, security headers, request context and request logging
before reaching a route.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from papercontest.api.auth import public
from papercontest.api.constants import CORRELATION_ID_HEADER, REQUEST_ID_HEADER
from papercontest.api.middleware.error_handler import register_exception_handlers
from papercontest.api.middleware.request_context import RequestContextMiddleware
from papercontest.api.middleware.request_logging import RequestLoggingMiddleware
from papercontest.api.middleware.security_headers import SecurityHeadersMiddleware
from papercontest.api.routers import system
from papercontest.api.utils.responses import ORJSONResponse
from papercontest.core.config import Settings, get_settings
from papercontest.core.logging import setup_logging
from papercontest.core.observability import instrument_app, setup_tracing


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Log application startup and shutdown.

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

    setup_logging(settings)
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

    register_exception_handlers(application)

    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)
    application.add_middleware(RequestContextMiddleware)
    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[CORRELATION_ID_HEADER, REQUEST_ID_HEADER],
    )

    application.include_router(system.router, prefix=settings.api_prefix)

    @application.get("/health")
    @public
    async def health() -> dict[str, str]:
        """Liveness check for container orchestration and load balancers."""
        return {"status": "healthy"}

    @application.get("/info")
    @public
    async def info(
        app_settings: Annotated[Settings, Depends(get_settings)],
    ) -> dict[str, Any]:
        """Get application information.

        Args:
            app_settings: Application settings injected via dependency.

        Returns:
            dict[str, Any]: Application name, version and environment.
        """
        return {
            "app_name": app_settings.app_name,
            "version": app_settings.app_version,
            "environment": app_settings.environment,
            "debug": app_settings.debug,
            "api_prefix": app_settings.api_prefix,
        }

    instrument_app(application, settings)

    return application


app = create_app()
