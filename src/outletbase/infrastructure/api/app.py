"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from outletbase.core.config import get_settings
from outletbase.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from outletbase.domain.exceptions import OutletBaseError
from outletbase.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the application.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "Starting OutletBase",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        service_area_mode=settings.service_area_mode,
        email_provider=settings.email_provider,
    )

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down OutletBase")
    await close_database()
    logger.info("Database connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Outlets, service areas, admin invitations, menus and orders",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
    """

    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check endpoint.

        Returns 200 if the service is running. Does not check
        database connectivity or other dependencies.
        """
        return {
            "status": "healthy",
            "service": "OutletBase",
            "version": get_settings().app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Readiness check endpoint, including database connectivity."""
        db = get_db_manager()
        if await db.check_connection():
            return {
                "status": "ready",
                "service": "OutletBase",
                "version": get_settings().app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": "OutletBase",
                "database": "disconnected",
            },
        )

    @app.get("/live", tags=["health"])
    async def liveness_check():
        return {
            "status": "alive",
            "service": "OutletBase",
            "version": get_settings().app_version,
        }


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from outletbase.infrastructure.api.routes import (
        admins_router,
        delivery_agents_router,
        delivery_router,
        invitations_router,
        outlet_invitations_router,
        outlet_orders_router,
        outlet_products_router,
        outlets_router,
        products_router,
        store_orders_router,
        store_router,
    )

    settings = get_settings()
    prefix = settings.api_prefix

    app.include_router(store_router, prefix=f"{prefix}/store", tags=["store"])
    app.include_router(store_orders_router, prefix=f"{prefix}/store", tags=["orders"])
    app.include_router(outlets_router, prefix=f"{prefix}/outlets", tags=["outlets"])
    app.include_router(admins_router, prefix=f"{prefix}/outlets", tags=["admins"])
    app.include_router(
        outlet_invitations_router, prefix=f"{prefix}/outlets", tags=["invitations"]
    )
    app.include_router(invitations_router, prefix=f"{prefix}/invitations", tags=["invitations"])
    app.include_router(products_router, prefix=f"{prefix}/products", tags=["products"])
    app.include_router(outlet_products_router, prefix=f"{prefix}/outlets", tags=["products"])
    app.include_router(
        delivery_agents_router, prefix=f"{prefix}/outlets", tags=["delivery-agents"]
    )
    app.include_router(outlet_orders_router, prefix=f"{prefix}/outlets", tags=["orders"])
    app.include_router(delivery_router, prefix=f"{prefix}/delivery", tags=["delivery"])

    @app.get(prefix, tags=["root"])
    async def api_root():
        """API root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api_version": "v1",
        }


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Business-rule failures become ``{"error": code, "message": message}``
    with the status carried by the exception. Database failures are
    reported as a temporary condition so clients can tell them apart
    from invalid requests.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(OutletBaseError)
    async def outletbase_error_handler(request: Request, exc: OutletBaseError):
        logger.info(
            "Request rejected",
            path=str(request.url.path),
            method=request.method,
            error=exc.code,
            status_code=exc.status_code,
        )
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.code, "message": exc.message},
            headers=headers,
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            "Database error",
            path=str(request.url.path),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=503,
            content={
                "error": "internal_error",
                "message": "Temporary failure, try again later",
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "message": str(exc) if get_settings().debug else "An unexpected error occurred",
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request and propagate the correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID") or new_correlation_id()
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
