"""
Application factory for FastAPI.

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings
    test_app = create_app(settings=Settings(environment="test", _env_file=None))
"""

import logging
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _init_sentry(settings)

    app = FastAPI(
        title="Hypertrophy Program API",
        description="Deterministic 12-week hypertrophy program generation",
        version="1.0.0",
    )

    _configure_cors(app, settings)
    _include_routers(app)

    if not settings.llm_enabled:
        logger.info("OPENAI_API_KEY not set, programs come from the rule engine only")

    return app


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
            profiles_sample_rate=0.1,
        )
        logger.info("Sentry initialized for hypertrophy-api")


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        generation_router,
        health_router,
        programs_router,
        prs_router,
        weights_router,
    )

    # /health at root
    app.include_router(health_router)

    app.include_router(generation_router)
    app.include_router(programs_router)
    app.include_router(prs_router)
    app.include_router(weights_router)


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
