"""Infrastructure layer implementations for betterlog."""

from betterlog.infrastructure.stores import InMemoryStore, RedisStore
from betterlog.infrastructure.tls import (
    CertificateBundle,
    CertificateManager,
    parse_bundle,
)

__all__ = [
    "InMemoryStore",
    "RedisStore",
    "CertificateBundle",
    "CertificateManager",
    "parse_bundle",
]
