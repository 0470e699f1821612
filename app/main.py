"""
Property Recommendation API - FastAPI application entry point.

A property recommendation service that collects home-buyer preferences and
asks Gemini for matching properties, in English, Arabic or French.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import router
from app.config import get_settings
from app.errors import ConfigurationError
from app.services.gemini_service import validate_api_key

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events for the application. A missing or
    placeholder Gemini key is logged here and reported per request, so the
    form and health endpoints stay available.
    """
    settings = get_settings()
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)

    try:
        validate_api_key(settings.gemini_api_key)
    except ConfigurationError as e:
        logger.warning("Recommendations disabled until configured: %s", e)
    else:
        logger.info("Configuration validated successfully")

    yield
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()
    if settings.debug:
        logging.getLogger("app").setLevel(logging.DEBUG)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=(
            "A property recommendation API that turns home-buyer preferences "
            "into AI-generated property suggestions."
        ),
        lifespan=lifespan,
    )

    # Configure CORS for frontend access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routes
    app.include_router(router)

    return app


# Create the application instance
app = create_app()


@app.get("/health", tags=["health"])
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns basic application status for monitoring and load balancers.
    """
    settings = get_settings()
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/", tags=["root"])
async def root() -> dict:
    """Root endpoint with API information."""
    settings = get_settings()
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
    }
