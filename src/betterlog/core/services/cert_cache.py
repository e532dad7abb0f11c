"""Certificate cache - cancellable, namespaced access to a remote store."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from betterlog.core.entities.cancellation import CancellationToken
from betterlog.core.errors import CacheCancelledError, CacheMissError, StoreError
from betterlog.core.interfaces.key_value_store import IKeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SEPARATOR = "/"


class CertCache:
    """Certificate cache backed by a shared key-value store.

    Implements the get/put/delete contract an automatic-TLS certificate
    manager persists through. Keys are namespaced as
    ``prefix + separator + key`` so several deployments can share one
    store.

    Each call runs its store request as its own task and races it against
    the caller's cancellation token. When the token wins, the call raises
    CacheCancelledError at once and the store request is left to finish
    in the background; it is never force-cancelled.

    A put whose token has already fired is never dispatched to the store.
    """

    def __init__(
        self,
        store: IKeyValueStore,
        prefix: str = "",
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        """Initialize the certificate cache.

        Args:
            store: The store holding certificate data.
            prefix: Namespace prepended to every key.
            separator: Character placed between prefix and key.
        """
        if not separator:
            raise ValueError("separator must not be empty")
        self._store = store
        self._prefix = prefix
        self._separator = separator
        # Strong references to store tasks abandoned after cancellation
        self._background: set[asyncio.Future[Any]] = set()

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def background_tasks(self) -> int:
        """Number of abandoned store calls still running."""
        return len(self._background)

    def full_key(self, key: str) -> str:
        """Return the namespaced store key for a cache key.

        Raises:
            ValueError: If key is empty.
        """
        if not key:
            raise ValueError("cache key must not be empty")
        return f"{self._prefix}{self._separator}{key}"

    async def get(self, token: CancellationToken, key: str) -> bytes:
        """Read certificate data stored under key.

        Args:
            token: The caller's cancellation token.
            key: The cache key (hostname or challenge token).

        Returns:
            The stored bytes.

        Raises:
            CacheMissError: If nothing is stored under key.
            CacheCancelledError: If the token fired before the read finished.
            StoreError: If the store call failed.
        """
        full_key = self.full_key(key)
        data = await self._run(token, "get", key, lambda: self._store.get(full_key))
        if data is None:
            logger.debug("Cache miss for %s", full_key)
            raise CacheMissError(key)
        return data

    async def put(self, token: CancellationToken, key: str, value: bytes) -> None:
        """Write certificate data under key, overwriting without expiry.

        Args:
            token: The caller's cancellation token.
            key: The cache key.
            value: The bytes to store. May be empty.

        Raises:
            CacheCancelledError: If the token fired before the write finished.
                If it fired before the write was dispatched, the store is
                left untouched.
            StoreError: If the store call failed.
        """
        full_key = self.full_key(key)

        async def write() -> None:
            # Checked in the same loop step that dispatches the request
            if token.cancelled:
                logger.debug("Skipping write to %s: %s", full_key, token.reason)
                raise CacheCancelledError("put", key, token.reason)
            await self._store.set(full_key, value)

        await self._run(token, "put", key, write)

    async def delete(self, token: CancellationToken, key: str) -> None:
        """Remove key from the store. Removing an absent key succeeds.

        Args:
            token: The caller's cancellation token.
            key: The cache key.

        Raises:
            CacheCancelledError: If the token fired before the delete finished.
            StoreError: If the store call failed.
        """
        full_key = self.full_key(key)
        await self._run(token, "delete", key, lambda: self._store.delete(full_key))

    async def drain(self, timeout: float | None = None) -> int:
        """Wait for abandoned store calls to finish.

        Args:
            timeout: Maximum seconds to wait. None waits indefinitely.

        Returns:
            Number of calls still running when the wait ended.
        """
        if not self._background:
            return 0
        _, pending = await asyncio.wait(set(self._background), timeout=timeout)
        return len(pending)

    async def _run(
        self,
        token: CancellationToken,
        operation: str,
        key: str,
        call: Callable[[], Awaitable[T]],
    ) -> T:
        """Run one store call, returning as soon as it or the token resolves."""
        if token.cancelled:
            raise CacheCancelledError(operation, key, token.reason)

        task = asyncio.ensure_future(call())
        waiter = asyncio.ensure_future(token.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            self._abandon(task, operation, key)
            raise
        finally:
            waiter.cancel()

        if not task.done():
            self._abandon(task, operation, key)
            logger.debug("%s %s cancelled: %s", operation, key, token.reason)
            raise CacheCancelledError(operation, key, token.reason)

        try:
            return task.result()
        except CacheCancelledError:
            raise
        except Exception as e:
            logger.warning("Store %s failed for %s: %s", operation, key, e)
            raise StoreError(operation, key, e) from e

    def _abandon(self, task: asyncio.Future[Any], operation: str, key: str) -> None:
        self._background.add(task)

        def _finished(fut: asyncio.Future[Any]) -> None:
            self._background.discard(fut)
            if fut.cancelled():
                return
            exc = fut.exception()
            if exc is not None and not isinstance(exc, CacheCancelledError):
                logger.warning(
                    "Abandoned %s for %s failed: %s", operation, key, exc
                )

        task.add_done_callback(_finished)
