"""Certificate cache interface."""

from typing import Protocol

from betterlog.core.entities.cancellation import CancellationToken


class ICertCache(Protocol):
    """Contract an automatic-TLS certificate manager persists through.

    Every method observes the caller's cancellation token and returns
    promptly once it fires.
    """

    async def get(self, token: CancellationToken, key: str) -> bytes:
        """Read certificate data stored under key.

        Raises:
            CacheMissError: If nothing is stored under key.
            CacheCancelledError: If the token fired first.
            StoreError: If the store call failed.
        """
        ...

    async def put(self, token: CancellationToken, key: str, value: bytes) -> None:
        """Write certificate data under key.

        Raises:
            CacheCancelledError: If the token fired first.
            StoreError: If the store call failed.
        """
        ...

    async def delete(self, token: CancellationToken, key: str) -> None:
        """Remove key. Removing an absent key succeeds.

        Raises:
            CacheCancelledError: If the token fired first.
            StoreError: If the store call failed.
        """
        ...
