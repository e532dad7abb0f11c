"""Health reporter service."""

import logging
import socket

from betterlog.core.entities.health import HealthStatus
from betterlog.core.interfaces.health_check import IHealthCheck

logger = logging.getLogger(__name__)


def determine_hostname() -> str:
    """Return this machine's hostname, or "unknown" if it cannot be read."""
    try:
        return socket.gethostname() or "unknown"
    except OSError:
        return "unknown"


class HealthReporter:
    """Runs registered health checks and reports the combined result.

    With no checks registered the reporter is always healthy.
    """

    def __init__(
        self,
        checks: list[IHealthCheck] | None = None,
        hostname: str | None = None,
    ) -> None:
        self._checks: list[IHealthCheck] = list(checks or [])
        self._hostname = hostname or determine_hostname()

    @property
    def hostname(self) -> str:
        return self._hostname

    def add_check(self, check: IHealthCheck) -> None:
        """Register an additional health check."""
        self._checks.append(check)

    async def check(self) -> HealthStatus:
        """Run all checks, stopping at the first failure.

        Returns:
            The resulting HealthStatus.
        """
        for health_check in self._checks:
            try:
                await health_check()
            except Exception as e:
                logger.error("Health check failed: %s", e)
                return HealthStatus(
                    hostname=self._hostname,
                    healthy=False,
                    error=str(e),
                    message="problem detected",
                )
        return HealthStatus(hostname=self._hostname, healthy=True)
