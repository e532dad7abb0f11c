"""Health check application, served on its own listener."""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from betterlog.core.services.health import HealthReporter


def create_healthz_app(reporter: HealthReporter) -> FastAPI:
    """Create the application answering liveness probes on /healthz."""
    app = FastAPI(title="betterlog healthz", docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/healthz")
    async def healthz() -> JSONResponse:
        status = await reporter.check()
        return JSONResponse(
            status.to_dict(),
            status_code=200 if status.healthy else 500,
        )

    return app
