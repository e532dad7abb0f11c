"""Exceptions raised by betterlog."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from betterlog.core.entities.cancellation import CancelReason


class CertCacheError(Exception):
    """Base class for certificate cache errors."""


class CacheMissError(CertCacheError):
    """Raised when a key has no stored value.

    Callers treat this as "issue a new certificate", never as a
    store failure.
    """

    def __init__(self, key: str) -> None:
        super().__init__(f"cache miss: {key!r}")
        self.key = key


class CacheCancelledError(CertCacheError):
    """Raised when the caller's token fired before the operation finished."""

    def __init__(self, operation: str, key: str, reason: "CancelReason | None") -> None:
        detail = reason.value if reason is not None else "canceled"
        super().__init__(f"{operation} {key!r}: {detail}")
        self.operation = operation
        self.key = key
        self.reason = reason


class StoreError(CertCacheError):
    """Raised when the underlying store call fails.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, operation: str, key: str, cause: BaseException) -> None:
        super().__init__(f"{operation} {key!r}: {cause}")
        self.operation = operation
        self.key = key


class CertificateUnavailableError(CertCacheError):
    """Raised when no certificate can be obtained for a host."""

    def __init__(self, host: str, detail: str) -> None:
        super().__init__(f"no certificate for {host!r}: {detail}")
        self.host = host


class ConfigError(ValueError):
    """Raised when the environment configuration is invalid."""
