"""FastAPI application entry point.

This module initializes the FastAPI application with its routers,
middleware, database lifecycle management, configuration, logging,
and the global exception handlers that translate errors into responses.
"""

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .database import lifespan
from .exceptions import (
    BusinessLogicException,
    NotFoundException,
    domain_exception_handler,
    generic_exception_handler,
    validation_exception_handler,
)
from .logging_config import setup_logging
from .middleware import RequestContextMiddleware
from .routers import health_router, users_router

logger = logging.getLogger(__name__)

# Initialize logging before creating the app
setup_logging(settings)
logger.info("Starting FastAPI application initialization")


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="User API",
        description="User and account CRUD service with SQLModel persistence",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    logger.info("FastAPI application created with basic configuration")

    # Configure middleware stack (order matters!)
    configure_middleware(app)

    configure_exception_handlers(app)

    configure_routers(app)

    configure_root_endpoints(app)

    logger.info("FastAPI application configuration completed")
    return app


def configure_middleware(app: FastAPI) -> None:
    """Configure middleware stack for the application.

    Args:
        app: FastAPI application instance
    """
    if settings.is_production:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[],
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type"],
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Outermost: stamps and logs every response, including CORS preflights
    app.add_middleware(RequestContextMiddleware)

    logger.info("Middleware stack configuration completed")


def configure_exception_handlers(app: FastAPI) -> None:
    """Configure global exception handlers.

    Handlers are resolved along the exception's class hierarchy, so the
    domain handlers win over the catch-all registered for ``Exception``.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(BusinessLogicException, domain_exception_handler)
    app.add_exception_handler(NotFoundException, domain_exception_handler)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Generic exception handler (must be last)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers configuration completed")


def configure_routers(app: FastAPI) -> None:
    """Configure and register API routers.

    Args:
        app: FastAPI application instance
    """
    app.include_router(health_router)
    app.include_router(users_router)

    logger.info("API routers registered successfully")


def configure_root_endpoints(app: FastAPI) -> None:
    """Configure root and utility endpoints.

    Args:
        app: FastAPI application instance
    """

    @app.get("/", tags=["root"], summary="API Information")
    async def root() -> dict[str, Any]:
        """Root endpoint providing API information."""
        return {
            "message": "User API is running",
            "version": "1.0.0",
            "environment": settings.environment,
            "docs": "/docs" if settings.debug else None,
            "endpoints": {
                "health": "/api/health",
                "users": "/users",
            },
        }


# Create the FastAPI application instance
app = create_app()

logger.info(
    "FastAPI application initialized successfully",
    extra={
        "environment": settings.environment,
        "debug": settings.debug,
        "database_url": settings.database_url.split("@")[-1]
        if "@" in settings.database_url
        else settings.database_url,
    },
)
