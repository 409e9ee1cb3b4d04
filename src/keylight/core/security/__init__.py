"""HTTP security helpers."""

from src.keylight.core.security.headers import SecurityHeadersMiddleware

__all__ = ["SecurityHeadersMiddleware"]
