"""Health check and metrics endpoints."""

import secrets
import time
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator

from src.keylight.api.dependencies.db import Executor
from src.keylight.core.config import get_settings
from src.keylight.core.db.engine import pool_status
from src.keylight.core.exceptions import StoreError
from src.keylight.core.shutdown import request_drain


def setup_health_endpoint(app: FastAPI) -> None:
    """Register ``GET /health``.

    Reports 503 while draining for shutdown or when the database check fails.
    """

    @app.get("/health", tags=["service"])
    async def health(executor: Executor) -> JSONResponse:
        settings = get_settings()

        if request_drain.draining:
            return JSONResponse(content=request_drain.health_body(), status_code=503)

        health_status: dict[str, Any] = {
            "status": "healthy",
            "database": "unknown",
            "environment": settings.app_env,
            "version": settings.app_version,
            "timestamp": time.time(),
        }

        started = time.perf_counter()
        try:
            await executor.execute("SELECT 1")
            health_status["database"] = "healthy"
        except StoreError as e:
            health_status["database"] = f"unhealthy: {e.message}"
            health_status["status"] = "unhealthy"
        health_status["database_latency_ms"] = round((time.perf_counter() - started) * 1000, 1)
        health_status["pool"] = pool_status(executor.engine)

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)


def setup_metrics(app: FastAPI) -> None:
    """Configure Prometheus metrics with optional API key protection."""
    settings = get_settings()
    instrumentator = Instrumentator(excluded_handlers=["/health", "/metrics"]).instrument(app)

    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(
            api_key: str | None = Depends(api_key_header),
        ) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        instrumentator.expose(
            app,
            endpoint="/metrics",
            include_in_schema=False,
            dependencies=[Depends(verify_metrics_key)],
        )
    else:
        instrumentator.expose(app, endpoint="/metrics", include_in_schema=False)
