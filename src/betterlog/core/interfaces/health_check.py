"""Health check interface."""

from typing import Protocol


class IHealthCheck(Protocol):
    """A single liveness probe.

    Returning normally means healthy; raising means unhealthy, with the
    exception text reported as the error.
    """

    async def __call__(self) -> None:
        ...
