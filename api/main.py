"""
API Application Entry Point

Defines the FastAPI application that hosts the background coordinator,
with CORS for the extension origin, error handling and lifecycle hooks.
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import messages
from api.services.assistant_service import build_background_service
from api.utils.error_handlers import add_exception_handlers
from atom_mail.config.settings import EnvironmentType, Settings, get_settings
from atom_mail.storage.key_value import KeyValueStore

# Configure logging
logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("api")


def create_application(settings: Optional[Settings] = None,
                       store: Optional[KeyValueStore] = None) -> FastAPI:
    """
    Create and configure FastAPI application instance.

    Args:
        settings: Settings to use, loaded from the environment when omitted
        store: Key-value store override for the coordinator

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url="/docs" if settings.ENVIRONMENT != EnvironmentType.PRODUCTION else None,
        redoc_url="/redoc" if settings.ENVIRONMENT != EnvironmentType.PRODUCTION else None,
        debug=settings.DEBUG
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=settings.CORS_METHODS,
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    app.state.background_service = build_background_service(settings, store)

    app.include_router(messages.router)

    @app.on_event("startup")
    async def startup_event():
        """Restore authentication and preferences before serving messages."""
        logger.info("Assistant service starting up")
        await app.state.background_service.init()

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Assistant service shutting down")

    @app.get("/health", tags=["Monitoring"])
    async def health_check():
        """API health check endpoint."""
        return {"status": "healthy"}

    logger.info(f"Application initialized in {settings.ENVIRONMENT.value} environment")
    return app
