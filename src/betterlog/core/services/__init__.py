"""Domain services for betterlog."""

from betterlog.core.services.cert_cache import DEFAULT_SEPARATOR, CertCache
from betterlog.core.services.health import HealthReporter, determine_hostname

__all__ = [
    "CertCache",
    "DEFAULT_SEPARATOR",
    "HealthReporter",
    "determine_hostname",
]
