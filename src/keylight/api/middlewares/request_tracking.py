"""Request tracking middleware for graceful shutdown."""

from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.keylight.core.shutdown import request_drain


async def request_tracking_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Track in-flight requests, except health and metrics scrapes."""
    if request.url.path in ("/health", "/metrics"):
        return await call_next(request)

    async with request_drain.track():
        return await call_next(request)
