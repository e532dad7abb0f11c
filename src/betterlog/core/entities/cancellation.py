"""Cancellation token entity."""

import asyncio
from enum import Enum


class CancelReason(Enum):
    """Why a cancellation token fired."""

    CANCELED = "canceled"
    DEADLINE_EXCEEDED = "deadline exceeded"


class CancellationToken:
    """Caller-owned signal that an operation should stop as soon as possible.

    The token is created by whoever starts an operation (for example a
    certificate manager handling a handshake). Callees only observe it:
    they check ``cancelled`` or await ``wait()``.

    Once fired, a token stays fired and keeps its first reason.

    Example:
        token = CancellationToken.with_timeout(5.0)
        data = await cert_cache.get(token, "example.com")
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: CancelReason | None = None
        self._timer: asyncio.TimerHandle | None = None

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        """Create a token that fires with DEADLINE_EXCEEDED after a delay.

        Must be called from a running event loop.

        Args:
            seconds: Delay before the deadline fires.

        Returns:
            A new CancellationToken.
        """
        token = cls()
        loop = asyncio.get_running_loop()
        token._timer = loop.call_later(
            seconds, token.cancel, CancelReason.DEADLINE_EXCEEDED
        )
        return token

    @property
    def cancelled(self) -> bool:
        """Whether the token has fired."""
        return self._event.is_set()

    @property
    def reason(self) -> CancelReason | None:
        """The reason the token fired, or None while it has not."""
        return self._reason

    def cancel(self, reason: CancelReason = CancelReason.CANCELED) -> None:
        """Fire the token. Repeated calls are no-ops."""
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def wait(self) -> CancelReason | None:
        """Wait until the token fires.

        Returns:
            The cancellation reason.
        """
        await self._event.wait()
        return self._reason

    def __repr__(self) -> str:
        state = self._reason.value if self._reason else "active"
        return f"CancellationToken({state})"
