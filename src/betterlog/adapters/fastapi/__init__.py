"""FastAPI adapter for betterlog."""

from betterlog.adapters.fastapi.app import create_app
from betterlog.adapters.fastapi.auth import BasicAuthMiddleware
from betterlog.adapters.fastapi.healthz import create_healthz_app

__all__ = [
    "BasicAuthMiddleware",
    "create_app",
    "create_healthz_app",
]
