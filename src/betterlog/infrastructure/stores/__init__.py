"""Key-value store implementations."""

from betterlog.infrastructure.stores.memory import InMemoryStore
from betterlog.infrastructure.stores.redis import RedisStore

__all__ = ["InMemoryStore", "RedisStore"]
