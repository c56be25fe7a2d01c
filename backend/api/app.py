"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    QuadError,
    ValidationError,
)
from modules.auth.routes import router as auth_router
from modules.posts.routes import router as posts_router

from .models.errors import ErrorResponse
from .routes import colleges, health, users

logger = logging.getLogger(__name__)

# Checked in order; the first matching base wins
STATUS_BY_ERROR: list[tuple[type[QuadError], int]] = [
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (ExternalServiceError, 503),
]

SERVICE_UNAVAILABLE_MESSAGE = "The service is temporarily unavailable. Please try again."


def status_for(exc: QuadError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def quad_error_handler(request: Request, exc: QuadError) -> JSONResponse:
    """Render business errors as ErrorResponse bodies."""
    status_code = status_for(exc)

    if isinstance(exc, ExternalServiceError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.details}")
        body = ErrorResponse(error=exc.code, message=SERVICE_UNAVAILABLE_MESSAGE)
    else:
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
        body = ErrorResponse(**exc.to_dict())

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port} ({settings.storage_backend} storage)")
    if settings.session_jwt_secret == "change-me-in-production" and not settings.debug:
        logger.warning("SESSION_JWT_SECRET is using the default value")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Campus network API: university email signup, verification and feed",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(QuadError, quad_error_handler)

    # Register routes
    error_responses = {400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}}
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"], responses={409: {"model": ErrorResponse}, **error_responses})
    app.include_router(users.router, prefix="/api/users", tags=["users"], responses={403: {"model": ErrorResponse}, **error_responses})
    app.include_router(colleges.router, prefix="/api/colleges", tags=["colleges"])
    app.include_router(posts_router, prefix="/api/posts", tags=["posts"], responses={404: {"model": ErrorResponse}, **error_responses})

    return app


# Application instance for uvicorn
app = create_app()
