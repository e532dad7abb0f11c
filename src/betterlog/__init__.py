"""betterlog - log relay endpoint with a Redis-backed automatic-TLS cache.

Posted log lines are relayed verbatim to standard output. In secure mode
the server keeps its TLS certificates in a shared Redis store, so every
instance behind a load balancer serves the same certificates and none of
them has to re-issue after a restart.

Example:
    from betterlog import (
        CancellationToken,
        CertCache,
        RedisStore,
    )

    cache = CertCache(RedisStore("redis://localhost:6379"), prefix="certs")

    token = CancellationToken.with_timeout(5.0)
    await cache.put(token, "example.com", bundle)  # stored as "certs/example.com"
    data = await cache.get(token, "example.com")

Handling a miss:
    from betterlog import CacheMissError

    try:
        data = await cache.get(token, host)
    except CacheMissError:
        data = await issue_certificate(host)
        await cache.put(token, host, data)
"""

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
from betterlog.infrastructure import (
    CertificateBundle,
    CertificateManager,
    InMemoryStore,
    RedisStore,
    parse_bundle,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
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
    # Core interfaces
    "ICertCache",
    "IHealthCheck",
    "IKeyValueStore",
    # Core services
    "CertCache",
    "HealthReporter",
    # Infrastructure implementations
    "InMemoryStore",
    "RedisStore",
    "CertificateBundle",
    "CertificateManager",
    "parse_bundle",
]
