"""Health status entity."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class HealthStatus:
    """Result of a health check, as reported by the healthz endpoint."""

    hostname: str
    healthy: bool
    error: str | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict, omitting unset diagnostics."""
        return {k: v for k, v in asdict(self).items() if v is not None}
