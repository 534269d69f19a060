"""FastAPI app factory"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .. import __version__
from ..core.config import configure_logging, get_config
from ..core.errors import ReviewerServiceError
from ..core.services import Services, create_services
from ..core.storage import create_repositories

logger = logging.getLogger(__name__)


def error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Builds storage and services on startup unless they were injected, and
    releases them on shutdown.
    """
    owns_services = getattr(app.state, "services", None) is None
    if owns_services:
        config = get_config()
        configure_logging(config)
        repositories = await create_repositories(config)
        app.state.config = config
        app.state.services = create_services(repositories, config)
        logger.info(f"Reviewer assignment API started (storage={config.storage})")

    yield

    if owns_services:
        await app.state.services.close()
        logger.info("Reviewer assignment API stopped")


async def handle_service_error(request: Request, exc: ReviewerServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"Error handling {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.code, "Internal server error"),
        )
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.code, exc.message))


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(status_code=400, content=error_body("INVALID_REQUEST", message))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=error_body("INTERNAL_ERROR", "Internal server error"))


def create_app(services: Optional[Services] = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        services: Pre-built service layer. When omitted, storage and
            services are created from the global configuration at startup.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="PR Reviewer Assignment API",
        description="Assigns pull request reviewers within teams and rebalances review load",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_exception_handler(ReviewerServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # Register routes
    from .routes import pull_requests, stats, teams, users

    app.include_router(teams.router, tags=["teams"])
    app.include_router(users.router, tags=["users"])
    app.include_router(pull_requests.router, tags=["pull requests"])
    app.include_router(stats.router, tags=["stats"])

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "service": "prreviewers"}

    return app
