from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from src.keylight.api.middlewares import setup_middlewares
from src.keylight.api.v1.router import api_router
from src.keylight.core.config import get_settings
from src.keylight.core.exceptions import setup_exception_handlers
from src.keylight.core.health import setup_health_endpoint, setup_metrics
from src.keylight.core.logging import get_logger, setup_logging
from src.keylight.core.migrations import run_migrations_async
from src.keylight.core.shutdown import shutdown_gracefully
from src.keylight.models.enums import (
    BuildBudget,
    BuyerCategory,
    ConstructionTimeline,
    FinancingPlan,
    LandStatus,
    SubmissionStatus,
    enum_values,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(
        "Starting application",
        app=settings.app_name,
        version=settings.app_version,
        environment=settings.app_env,
    )

    if settings.run_migrations_on_startup:
        await run_migrations_async()
        logger.info("Database migrations applied")

    yield

    await shutdown_gracefully(settings.shutdown_grace_period)
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "submissions", "description": "Intake form submissions and admin review"},
    {"name": "users", "description": "User accounts and their projects and submissions"},
    {"name": "projects", "description": "Build projects"},
    {"name": "service", "description": "Service information and health"},
]


def api_info() -> dict[str, Any]:
    """Service description with the accepted enumeration values."""
    settings = get_settings()
    return {
        "message": settings.app_name,
        "version": settings.app_version,
        "environment": settings.app_env,
        "endpoints": {
            "submissions": "/api/v1/submissions",
            "users": "/api/v1/users",
            "projects": "/api/v1/projects",
            "health": "/health",
            "metrics": "/metrics",
        },
        "validStatuses": enum_values(SubmissionStatus),
        "validBuyerCategories": enum_values(BuyerCategory),
        "validFinancingPlans": enum_values(FinancingPlan),
        "validLandStatuses": enum_values(LandStatus),
        "validBuildBudgets": enum_values(BuildBudget),
        "validTimelines": enum_values(ConstructionTimeline),
    }


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Home-construction intake submissions API",
        version=settings.app_version,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)

    @app.get("/", tags=["service"])
    async def root() -> dict[str, Any]:
        return api_info()

    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on the configured port."""
    settings = get_settings()
    config = uvicorn.Config(
        "src.keylight.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level="debug" if settings.debug else "info",
        timeout_graceful_shutdown=settings.shutdown_grace_period,
    )
    uvicorn.Server(config).run()


if __name__ == "__main__":
    run()
