"""In-memory key-value store implementation."""

from cachetools import LRUCache  # type: ignore[import-untyped]


class InMemoryStore:
    """In-memory store using an LRU cache.

    Suitable for single-process deployments and tests. Entries never
    expire, but the least recently used ones are evicted once maxsize is
    reached; for a store shared across instances, use RedisStore.
    """

    def __init__(self, maxsize: int = 1000) -> None:
        """Initialize the in-memory store.

        Args:
            maxsize: Maximum number of entries kept.
        """
        self._maxsize = maxsize
        self._data: LRUCache[str, bytes] = LRUCache(maxsize=maxsize)

    async def get(self, key: str) -> bytes | None:
        """Retrieve a value by key.

        Args:
            key: The full store key.

        Returns:
            The stored bytes, or None if absent.
        """
        return self._data.get(key)

    async def set(self, key: str, value: bytes) -> None:
        """Store a value, overwriting any previous one.

        Args:
            key: The full store key.
            value: The bytes to store.
        """
        self._data[key] = bytes(value)

    async def delete(self, key: str) -> None:
        """Remove a key if present.

        Args:
            key: The full store key.
        """
        self._data.pop(key, None)

    async def ping(self) -> None:
        """Always reachable."""

    async def close(self) -> None:
        """Nothing to release."""

    def keys(self) -> list[str]:
        """Return the stored keys."""
        return list(self._data.keys())

    def __contains__(self, key: object) -> bool:
        """Return whether key is stored."""
        return key in self._data

    def __len__(self) -> int:
        """Return the number of stored entries."""
        return len(self._data)

    @property
    def maxsize(self) -> int:
        """Return the maximum number of entries."""
        return self._maxsize
