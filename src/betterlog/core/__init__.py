"""Core domain layer for betterlog."""

from betterlog.core.entities import (
    CancellationToken,
    CancelReason,
    HealthStatus,
    ServerConfig,
)
from betterlog.core.errors import (
    CacheCancelledError,
    CacheMissError,
    CertCacheError,
    CertificateUnavailableError,
    ConfigError,
    StoreError,
)
from betterlog.core.interfaces import ICertCache, IHealthCheck, IKeyValueStore
from betterlog.core.services import CertCache, HealthReporter

__all__ = [
    # Entities
    "CancellationToken",
    "CancelReason",
    "HealthStatus",
    "ServerConfig",
    # Errors
    "CertCacheError",
    "CacheMissError",
    "CacheCancelledError",
    "StoreError",
    "CertificateUnavailableError",
    "ConfigError",
    # Interfaces
    "ICertCache",
    "IHealthCheck",
    "IKeyValueStore",
    # Services
    "CertCache",
    "HealthReporter",
]
