"""FastAPI application factory for the dashboard backend.

Usage:
    # Development
    fastapi dev src/tunas/api/app.py

    # Production
    fastapi run src/tunas/api/app.py
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from tunas import __version__, configure_logging, get_logger
from tunas.api.routes import (
    clubs_router,
    health_router,
    relays_router,
    stats_router,
    swimmers_router,
)
from tunas.config import get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    configure_logging()
    logger.info(
        "app_starting",
        environment=settings.environment.value,
        api_url=settings.api_url,
    )
    yield
    logger.info("app_shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Tunas Dashboard API",
        description="Club rosters, swimmer results and time progression charts",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )

    app.include_router(health_router)
    app.include_router(stats_router, prefix="/api/v1")
    app.include_router(clubs_router, prefix="/api/v1")
    app.include_router(swimmers_router, prefix="/api/v1")
    app.include_router(relays_router, prefix="/api/v1")

    return app


# Application instance for uvicorn
app = create_app()
