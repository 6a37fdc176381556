"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from health_tracker.api.days import router as days_router
from health_tracker.api.errors import register_error_handlers
from health_tracker.api.nutrition import router as nutrition_router
from health_tracker.app_logging import configure_logging
from health_tracker.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Health tracker starting (%s)", container.settings.environment)
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Health Tracker", lifespan=lifespan)
    app.state.container = container

    register_error_handlers(app)
    app.include_router(days_router)
    app.include_router(nutrition_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
