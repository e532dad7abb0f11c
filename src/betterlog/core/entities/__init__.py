"""Domain entities for betterlog."""

from betterlog.core.entities.cancellation import CancellationToken, CancelReason
from betterlog.core.entities.health import HealthStatus
from betterlog.core.entities.server_config import ServerConfig

__all__ = [
    "CancellationToken",
    "CancelReason",
    "HealthStatus",
    "ServerConfig",
]
