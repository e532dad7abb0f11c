"""Tests for the log relay and healthz applications."""

import base64
import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from starlette.requests import ClientDisconnect

from betterlog.adapters.fastapi import create_app, create_healthz_app
from betterlog.core.entities.server_config import ServerConfig
from betterlog.core.services.health import HealthReporter


def _basic(username: str, password: str) -> dict[str, str]:
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def sink() -> io.BytesIO:
    return io.BytesIO()


class TestLogRelay:
    """Tests for POST /log."""

    @pytest.fixture
    def client(self, sink: io.BytesIO) -> TestClient:
        return TestClient(create_app(ServerConfig(), sink=lambda: sink))

    def test_relays_body_verbatim(self, client: TestClient, sink: io.BytesIO) -> None:
        body = b'{"message":"hello","severity":"info"}\n'

        response = client.post("/log", content=body)

        assert response.status_code == 200
        assert response.content == b""
        assert sink.getvalue() == body

    def test_relays_in_order(self, client: TestClient, sink: io.BytesIO) -> None:
        client.post("/log", content=b"first\n")
        client.post("/log", content=b"second\n")
        assert sink.getvalue() == b"first\nsecond\n"

    def test_empty_body(self, client: TestClient, sink: io.BytesIO) -> None:
        response = client.post("/log", content=b"")
        assert response.status_code == 200
        assert sink.getvalue() == b""

    def test_get_not_allowed(self, client: TestClient) -> None:
        assert client.get("/log").status_code == 405

    def test_no_auth_required_by_default(self, client: TestClient) -> None:
        assert client.post("/log", content=b"x").status_code == 200

    @pytest.mark.asyncio
    async def test_read_failure(self, sink: io.BytesIO) -> None:
        """Test a body that cannot be read yields 500 with the error text."""
        app = create_app(ServerConfig(), sink=lambda: sink)
        endpoint = next(r.endpoint for r in app.routes if getattr(r, "path", None) == "/log")
        request = MagicMock()
        request.body = AsyncMock(side_effect=ClientDisconnect())

        response = await endpoint(request)

        assert response.status_code == 500
        assert response.body == b"ClientDisconnect"
        assert sink.getvalue() == b""

    def test_default_sink_is_stdout(self, capfdbinary) -> None:
        client = TestClient(create_app(ServerConfig()))
        client.post("/log", content=b"to stdout\n")
        assert b"to stdout\n" in capfdbinary.readouterr().out


class TestBasicAuth:
    """Tests for basic auth on the log relay."""

    @pytest.fixture
    def client(self, sink: io.BytesIO) -> TestClient:
        config = ServerConfig(http_auth="logger:s3cret", http_realm="logs")
        return TestClient(create_app(config, sink=lambda: sink))

    def test_valid_credentials(self, client: TestClient, sink: io.BytesIO) -> None:
        response = client.post("/log", content=b"line\n", headers=_basic("logger", "s3cret"))
        assert response.status_code == 200
        assert sink.getvalue() == b"line\n"

    def test_missing_credentials(self, client: TestClient, sink: io.BytesIO) -> None:
        response = client.post("/log", content=b"line\n")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == 'Basic realm="logs"'
        assert sink.getvalue() == b""

    @pytest.mark.parametrize(
        "username,password",
        [("logger", "wrong"), ("other", "s3cret"), ("", "")],
    )
    def test_wrong_credentials(
        self, client: TestClient, username: str, password: str
    ) -> None:
        response = client.post("/log", content=b"x", headers=_basic(username, password))
        assert response.status_code == 401

    @pytest.mark.parametrize(
        "header",
        ["Bearer abc", "Basic !!!not-base64!!!", "Basic " + base64.b64encode(b"nocolon").decode()],
    )
    def test_malformed_header(self, client: TestClient, header: str) -> None:
        response = client.post("/log", content=b"x", headers={"Authorization": header})
        assert response.status_code == 401


class TestHealthz:
    """Tests for GET /healthz."""

    def test_healthy(self) -> None:
        client = TestClient(create_healthz_app(HealthReporter(hostname="web-1")))

        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json() == {"hostname": "web-1", "healthy": True}

    def test_unhealthy(self) -> None:
        reporter = HealthReporter(
            checks=[AsyncMock(side_effect=ConnectionError("redis down"))],
            hostname="web-1",
        )
        client = TestClient(create_healthz_app(reporter))

        response = client.get("/healthz")

        assert response.status_code == 500
        assert response.json() == {
            "hostname": "web-1",
            "healthy": False,
            "error": "redis down",
            "message": "problem detected",
        }

    def test_other_paths_not_found(self) -> None:
        client = TestClient(create_healthz_app(HealthReporter(hostname="web-1")))
        assert client.get("/log").status_code == 404
