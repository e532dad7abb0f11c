"""Core interfaces (Protocol classes) for betterlog."""

from betterlog.core.interfaces.cert_cache import ICertCache
from betterlog.core.interfaces.health_check import IHealthCheck
from betterlog.core.interfaces.key_value_store import IKeyValueStore

__all__ = [
    "ICertCache",
    "IHealthCheck",
    "IKeyValueStore",
]
