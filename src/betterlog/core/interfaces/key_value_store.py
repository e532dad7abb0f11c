"""Key-value store interface."""

from typing import Protocol


class IKeyValueStore(Protocol):
    """Contract for the remote store behind the certificate cache.

    Implementations talk to a network store (or memory) and know nothing
    about namespacing or cancellation. Methods are async so a slow store
    never blocks the event loop.
    """

    async def get(self, key: str) -> bytes | None:
        """Retrieve a value by key.

        Args:
            key: The full store key.

        Returns:
            The stored bytes, or None if the key is absent.
        """
        ...

    async def set(self, key: str, value: bytes) -> None:
        """Store a value without expiry, overwriting any previous value.

        Args:
            key: The full store key.
            value: The bytes to store.
        """
        ...

    async def delete(self, key: str) -> None:
        """Remove a key. Removing an absent key is not an error.

        Args:
            key: The full store key.
        """
        ...

    async def ping(self) -> None:
        """Raise if the store is unreachable."""
        ...

    async def close(self) -> None:
        """Release connections held by the store."""
        ...
