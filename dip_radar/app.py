"""
FastAPI application for the dip_radar API.

This module creates the application, configures middleware and registers
the analysis routes.
"""

import datetime
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dip_radar import __version__
from dip_radar.api_routes import analysis_router
from dip_radar.config import get_thresholds, load_server_settings
from dip_radar.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

# API Documentation tags
tags_metadata = [
    {
        "name": "analysis",
        "description": "Dip opportunity and trap analysis from holder, flow and price snapshots",
    },
    {
        "name": "system",
        "description": "System-level operations for monitoring",
    },
]


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        The configured FastAPI application
    """
    settings = load_server_settings()
    configure_logging(settings.LOG_LEVEL)

    # Fail fast on malformed threshold overrides
    get_thresholds()

    app = FastAPI(
        title="Dip Radar API",
        description="Scores token dips as entry opportunities or manipulated traps.",
        version=__version__,
        openapi_tags=tags_metadata,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(analysis_router)

    @app.get("/health", tags=["system"])
    async def health_check() -> Dict[str, Any]:
        """Check the health of the service."""
        return {
            "status": "healthy",
            "version": __version__,
            "timestamp": datetime.datetime.now().isoformat(),
        }

    logger.info("Application initialized successfully")
    return app
