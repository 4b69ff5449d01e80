"""FastAPI application entry point.

This module creates and configures the FastAPI application instance.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import api_router
from app.core.config import get_config
from app.core.container import get_container
from app.core.database import close_db
from app.core.exceptions import RecordNotFoundError, WorkflowError
from app.core.logging import get_logger, setup_logging
from app.services.publisher.dispatch import InProcessPublicationDispatcher

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events.

    Handles startup and shutdown events for the FastAPI application.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    config = get_config()
    container = get_container()

    # Startup
    logger.info("Starting SteamHub application", env=config.app_env)

    # Resolve the publication capability once; logs a warning when absent
    dispatcher = container.services.publication_dispatcher()

    yield

    # Shutdown
    logger.info("Shutting down SteamHub application")
    if isinstance(dispatcher, InProcessPublicationDispatcher) and dispatcher.pending:
        logger.info("Waiting for background publications", pending=dispatcher.pending)
        await dispatcher.wait_idle()
    await container.infrastructure.http_client().close()
    await close_db()
    logger.info("Cleanup complete")


# Create FastAPI application
_config = get_config()
app = FastAPI(
    title=_config.app_name,
    description="Review and publication workflow for educational resources",
    version="0.1.0",
    docs_url="/docs" if _config.is_development else None,
    redoc_url="/redoc" if _config.is_development else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=_config.cors_origins,
    allow_credentials=_config.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RecordNotFoundError)
async def record_not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    """Map missing records to 404."""
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=exc.to_dict())


@app.exception_handler(WorkflowError)
async def workflow_error_handler(request: Request, exc: WorkflowError) -> JSONResponse:
    """Map rejected workflow requests to 422."""
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=exc.to_dict())


# Health check endpoint
@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Health status
    """
    cfg = get_config()
    return {
        "status": "healthy",
        "app": cfg.app_name,
        "env": cfg.app_env,
    }


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint.

    Returns:
        Welcome message
    """
    return {
        "message": "SteamHub API",
        "version": "0.1.0",
        "docs": "/docs" if get_config().is_development else "disabled",
    }


app.include_router(api_router)
