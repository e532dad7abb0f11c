"""Log relay application."""

import logging
import sys
from collections.abc import Callable
from typing import BinaryIO

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.requests import ClientDisconnect
from starlette.responses import Response

from betterlog.adapters.fastapi.auth import BasicAuthMiddleware
from betterlog.core.entities.server_config import ServerConfig

logger = logging.getLogger(__name__)


def _stdout() -> BinaryIO:
    return sys.stdout.buffer


def create_app(
    config: ServerConfig,
    sink: Callable[[], BinaryIO] = _stdout,
) -> FastAPI:
    """Create the log relay application.

    Args:
        config: Server configuration.
        sink: Returns the stream request bodies are relayed to. Resolved
            per request so a replaced sys.stdout is honored.

    Returns:
        The FastAPI application.
    """
    app = FastAPI(
        title="betterlog",
        description="Relays posted log lines to standard output",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    if config.auth_enabled:
        logger.info("Configuring HTTP Auth access control")
        username, password = config.credentials
        app.add_middleware(
            BasicAuthMiddleware,
            username=username,
            password=password,
            realm=config.http_realm,
        )

    @app.post("/log")
    async def post_log(request: Request) -> Response:
        try:
            data = await request.body()
        except (ClientDisconnect, RuntimeError) as e:
            logger.warning("Failed to read log body: %r", e)
            return PlainTextResponse(str(e) or type(e).__name__, status_code=500)

        stream = sink()
        stream.write(data)
        stream.flush()
        return Response(status_code=200)

    return app
