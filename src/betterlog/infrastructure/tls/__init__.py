"""TLS certificate handling backed by the certificate cache."""

from betterlog.infrastructure.tls.bundle import CertificateBundle, parse_bundle
from betterlog.infrastructure.tls.manager import CertificateManager, Issuer

__all__ = [
    "CertificateBundle",
    "CertificateManager",
    "Issuer",
    "parse_bundle",
]
