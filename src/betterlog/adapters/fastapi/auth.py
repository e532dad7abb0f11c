"""HTTP basic auth middleware."""

import base64
import binascii
import logging
import secrets

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """Rejects requests without the configured basic auth credentials.

    Missing, malformed or wrong credentials get a 401 challenge for the
    configured realm.
    """

    def __init__(self, app: ASGIApp, username: str, password: str, realm: str) -> None:
        super().__init__(app)
        self._username = username.encode()
        self._password = password.encode()
        self._realm = realm

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self._authorized(request.headers.get("Authorization")):
            return Response(
                status_code=401,
                headers={"WWW-Authenticate": f'Basic realm="{self._realm}"'},
            )
        return await call_next(request)

    def _authorized(self, header: str | None) -> bool:
        if not header:
            return False

        scheme, _, param = header.partition(" ")
        if scheme.lower() != "basic":
            return False

        try:
            decoded = base64.b64decode(param.strip(), validate=True)
        except (binascii.Error, ValueError):
            logger.debug("Malformed basic auth header")
            return False

        username, sep, password = decoded.partition(b":")
        if not sep:
            return False

        # Evaluate both to keep timing independent of which part mismatched
        user_ok = secrets.compare_digest(username, self._username)
        password_ok = secrets.compare_digest(password, self._password)
        return user_ok and password_ok
