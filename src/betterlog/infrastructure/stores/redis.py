"""Redis key-value store implementation."""

import redis.asyncio as redis
from redis.asyncio.retry import Retry
from redis.backoff import ExponentialBackoff
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError


class RedisStore:
    """Redis store for sharing certificates across server instances.

    Values are written without expiry. Transient connection errors are
    retried by the client itself, up to max_retries times with
    exponential backoff; any other error reaches the caller.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        max_retries: int = 3,
        client: redis.Redis | None = None,
    ) -> None:
        """Initialize the Redis store.

        Args:
            redis_url: Redis connection URL.
            max_retries: Retries for transient connection errors.
            client: Pre-built client to use instead of connecting to redis_url.
        """
        if client is None:
            client = redis.from_url(  # type: ignore[no-untyped-call]
                redis_url,
                retry=Retry(ExponentialBackoff(), max_retries),
                retry_on_error=[RedisConnectionError, RedisTimeoutError],
            )
        self._redis: redis.Redis = client

    async def get(self, key: str) -> bytes | None:
        """Retrieve a value by key.

        Args:
            key: The full store key.

        Returns:
            The stored bytes, or None if the key is absent.
        """
        value = await self._redis.get(key)
        if isinstance(value, str):
            # decode_responses clients hand back text
            return value.encode()
        return value

    async def set(self, key: str, value: bytes) -> None:
        """Store a value without expiry.

        Args:
            key: The full store key.
            value: The bytes to store.
        """
        await self._redis.set(key, value)

    async def delete(self, key: str) -> None:
        """Remove a key. Absent keys are ignored by Redis.

        Args:
            key: The full store key.
        """
        await self._redis.delete(key)

    async def ping(self) -> None:
        """Check the connection, raising if Redis is unreachable."""
        await self._redis.ping()

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.aclose()

    async def __aenter__(self) -> "RedisStore":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
