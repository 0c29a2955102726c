"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
exception handlers and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from userbase.core.config import Settings, get_settings
from userbase.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from userbase.domain.services import UserServiceError
from userbase.infrastructure.auth import JWTService, PasswordHasher
from userbase.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging and initializes the database on startup, and closes
    the database connection on shutdown.
    """
    settings: Settings = app.state.settings

    configure_logging(settings)
    logger.info(
        "Starting UserBase",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database(get_db_manager(settings))
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down UserBase")
    await close_database()
    logger.info("Database connection closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to build the application from. Defaults to the
            cached application settings.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="User accounts, roles and JWT authentication",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    # Process-wide configuration, built once and injected into handlers
    app.state.settings = settings
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.jwt_service = JWTService.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
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
    settings: Settings = app.state.settings

    @app.get("/health", tags=["health"])
    async def health_check():
        """Return 200 while the process is serving requests."""
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Return 200 when the database is reachable, 503 otherwise."""
        db_healthy = await get_db_manager().check_connection()

        if db_healthy:
            return {
                "status": "ready",
                "service": settings.app_name,
                "version": settings.app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": settings.app_name,
                "database": "disconnected",
            },
        )


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from userbase.infrastructure.api.routes import auth_router, users_router

    prefix = app.state.settings.api_prefix

    app.include_router(auth_router, prefix=prefix)
    app.include_router(users_router, prefix=f"{prefix}/users")


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first['msg']}" if location else first["msg"]


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers.

    Every error response has the shape ``{"message": str}``.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(UserServiceError)
    async def user_service_error_handler(request: Request, exc: UserServiceError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info(
            "Request validation failed",
            path=str(request.url.path),
            errors=len(exc.errors()),
        )
        return JSONResponse(
            status_code=400,
            content={"message": _validation_message(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
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
            status_code=500,
            content={"message": "Database error"},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            path=str(request.url.path),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "message": str(exc) if app.state.settings.debug else "Internal server error",
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request and propagate a correlation ID."""
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


app = create_app()
