"""Pytest configuration for betterlog tests."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from betterlog.infrastructure.stores.memory import InMemoryStore


def self_signed_bundle(
    host: str = "logs.example.com",
    not_after: datetime | None = None,
    key: ec.EllipticCurvePrivateKey | None = None,
) -> bytes:
    """Build a stored-layout bundle: PKCS8 key, then a self-signed certificate."""
    key = key or ec.generate_private_key(ec.SECP256R1())
    not_after = not_after or datetime.now(timezone.utc) + timedelta(days=90)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, host)])
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_after - timedelta(days=90))
        .not_valid_after(not_after)
        .add_extension(x509.SubjectAlternativeName([x509.DNSName(host)]), critical=False)
        .sign(key, hashes.SHA256())
    )
    key_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    return key_pem + cert.public_bytes(serialization.Encoding.PEM)


class HangingStore(InMemoryStore):
    """In-memory store whose calls block until ``release`` is set.

    Records every call as (operation, key) the moment it is dispatched.
    """

    def __init__(self) -> None:
        super().__init__(maxsize=100)
        self.release = asyncio.Event()
        self.calls: list[tuple[str, str]] = []

    async def get(self, key: str) -> bytes | None:
        self.calls.append(("get", key))
        await self.release.wait()
        return await super().get(key)

    async def set(self, key: str, value: bytes) -> None:
        self.calls.append(("set", key))
        await self.release.wait()
        await super().set(key, value)

    async def delete(self, key: str) -> None:
        self.calls.append(("delete", key))
        await self.release.wait()
        await super().delete(key)


class FailingStore(InMemoryStore):
    """Store whose every call raises the given exception."""

    def __init__(self, error: Exception) -> None:
        super().__init__(maxsize=10)
        self.error = error

    async def get(self, key: str) -> bytes | None:
        raise self.error

    async def set(self, key: str, value: bytes) -> None:
        raise self.error

    async def delete(self, key: str) -> None:
        raise self.error


@pytest.fixture
def memory_store() -> InMemoryStore:
    """Create an empty in-memory store."""
    return InMemoryStore(maxsize=100)


@pytest.fixture
def hanging_store() -> HangingStore:
    """Create a store whose calls block until released."""
    return HangingStore()


@pytest.fixture
def failing_store():
    """Factory for stores that raise the given exception on every call."""
    return FailingStore


@pytest.fixture
def make_bundle():
    """Factory for bundles holding a real key and self-signed certificate."""
    return self_signed_bundle
