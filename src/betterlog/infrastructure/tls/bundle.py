"""Certificate bundle parsing.

Automatic-TLS managers store a host's material under the host name as a
single PEM blob: the private key followed by the certificate chain.
"""

import re
from dataclasses import dataclass
from datetime import datetime

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

_PEM_BLOCK = re.compile(
    rb"-----BEGIN ([A-Z0-9 ]+)-----\r?\n.*?-----END \1-----\r?\n?",
    re.DOTALL,
)


@dataclass(frozen=True)
class CertificateBundle:
    """PEM private key plus certificate chain for one host."""

    key_pem: bytes
    chain_pem: bytes

    def to_bytes(self) -> bytes:
        """Serialize in the stored layout: key first, then chain."""
        return self.key_pem + self.chain_pem

    @property
    def leaf(self) -> x509.Certificate:
        """The host certificate, first in the chain."""
        return x509.load_pem_x509_certificates(self.chain_pem)[0]

    @property
    def not_valid_after(self) -> datetime:
        """Expiry of the host certificate, timezone-aware UTC."""
        return self.leaf.not_valid_after_utc


def parse_bundle(data: bytes) -> CertificateBundle:
    """Split a stored bundle into its key and certificate chain.

    The key and every certificate are loaded, and the key must belong to
    the first (host) certificate.

    Args:
        data: The stored PEM blob.

    Returns:
        The parsed CertificateBundle.

    Raises:
        ValueError: If the blob does not hold exactly one private key and
            at least one certificate, if any block fails to load, or if
            the key does not match the host certificate.
    """
    keys: list[bytes] = []
    certs: list[bytes] = []
    for match in _PEM_BLOCK.finditer(data):
        label = match.group(1)
        block = match.group(0)
        if not block.endswith(b"\n"):
            block += b"\n"
        if label.endswith(b"PRIVATE KEY"):
            keys.append(block)
        elif label == b"CERTIFICATE":
            certs.append(block)

    if len(keys) != 1:
        raise ValueError(f"expected one private key, found {len(keys)}")
    if not certs:
        raise ValueError("no certificate found")

    bundle = CertificateBundle(key_pem=keys[0], chain_pem=b"".join(certs))
    try:
        key = serialization.load_pem_private_key(bundle.key_pem, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise ValueError(f"cannot load private key: {e}") from e
    try:
        leaf = bundle.leaf
    except ValueError as e:
        raise ValueError(f"cannot load certificate: {e}") from e

    if _public_der(key.public_key()) != _public_der(leaf.public_key()):
        raise ValueError("private key does not match certificate")
    return bundle


def _public_der(public_key: object) -> bytes:
    return public_key.public_bytes(  # type: ignore[attr-defined]
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
