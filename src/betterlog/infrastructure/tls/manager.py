"""Certificate manager that persists through the certificate cache."""

import logging
import ssl
import tempfile
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path

from betterlog.core.entities.cancellation import CancellationToken
from betterlog.core.errors import CacheMissError, CertificateUnavailableError
from betterlog.core.interfaces.cert_cache import ICertCache
from betterlog.infrastructure.tls.bundle import CertificateBundle, parse_bundle

logger = logging.getLogger(__name__)

# Obtains a fresh bundle for a host, e.g. from an ACME client
Issuer = Callable[[str], Awaitable[bytes]]

RENEW_BEFORE = timedelta(days=30)


class CertificateManager:
    """Loads per-host certificates from the cache and serves them by SNI.

    For every host the manager reads the cached bundle; on a miss it asks
    the issuer for a new one and writes it back. Unreadable or expired
    entries are deleted before reissuing, and entries close to expiry are
    renewed when an issuer is available. Each cache call gets its own
    deadline token.
    """

    def __init__(
        self,
        cache: ICertCache,
        hosts: list[str] | tuple[str, ...],
        issuer: Issuer | None = None,
        timeout: float = 30.0,
        renew_before: timedelta = RENEW_BEFORE,
    ) -> None:
        """Initialize the manager.

        Args:
            cache: Certificate cache to read and write bundles through.
            hosts: Host names to serve. The first one is the default.
            issuer: Coroutine function returning a new bundle for a host.
            timeout: Deadline in seconds for each cache call.
            renew_before: Reissue cached certificates expiring within
                this window.
        """
        if not hosts:
            raise ValueError("at least one host is required")
        self._cache = cache
        self._hosts = [host.lower() for host in hosts]
        self._issuer = issuer
        self._timeout = timeout
        self._renew_before = renew_before
        self._bundles: dict[str, CertificateBundle] = {}
        self._contexts: dict[str, ssl.SSLContext] = {}

    @property
    def hosts(self) -> list[str]:
        return list(self._hosts)

    def bundle(self, host: str) -> CertificateBundle | None:
        """Return the loaded bundle for host, if any."""
        return self._bundles.get(host.lower())

    async def load(self) -> None:
        """Obtain a certificate for every configured host.

        Raises:
            CertificateUnavailableError: If a host has no usable certificate
                and none can be issued.
            CacheCancelledError: If a cache call exceeded its deadline.
            StoreError: If the store failed.
        """
        for host in self._hosts:
            bundle = await self.obtain(host)
            self._bundles[host] = bundle
            self._contexts[host] = self._build_context(host, bundle)
            logger.info("Loaded certificate for %s", host)

    async def obtain(self, host: str) -> CertificateBundle:
        """Return a usable bundle for host, issuing one when needed."""
        try:
            data = await self._cache.get(self._token(), host)
        except CacheMissError:
            logger.info("No cached certificate for %s", host)
            return await self._issue(host)

        try:
            bundle = parse_bundle(data)
        except ValueError as e:
            logger.warning("Discarding unreadable certificate for %s: %s", host, e)
            await self._cache.delete(self._token(), host)
            return await self._issue(host)

        now = datetime.now(timezone.utc)
        expires = bundle.not_valid_after
        if expires <= now:
            logger.warning("Discarding certificate for %s expired at %s", host, expires)
            await self._cache.delete(self._token(), host)
            return await self._issue(host)
        if expires - now < self._renew_before:
            if self._issuer is None:
                logger.warning(
                    "Certificate for %s expires at %s and cannot be renewed", host, expires
                )
                return bundle
            logger.info("Renewing certificate for %s, expires at %s", host, expires)
            return await self._issue(host)
        return bundle

    def ssl_context(self) -> ssl.SSLContext:
        """Return a server context that picks the certificate by SNI.

        Unknown or missing server names get the first host's certificate.

        Raises:
            RuntimeError: If load() has not completed.
        """
        if not self._contexts:
            raise RuntimeError("certificates not loaded")
        default = self._contexts[self._hosts[0]]

        def select(sock: ssl.SSLObject, server_name: str | None, _: ssl.SSLContext) -> None:
            context = self._contexts.get((server_name or "").lower())
            if context is not None:
                sock.context = context

        default.sni_callback = select  # type: ignore[assignment]
        return default

    async def _issue(self, host: str) -> CertificateBundle:
        if self._issuer is None:
            raise CertificateUnavailableError(host, "not cached and no issuer configured")

        data = await self._issuer(host)
        try:
            bundle = parse_bundle(data)
        except ValueError as e:
            raise CertificateUnavailableError(host, f"issuer returned {e}") from e

        await self._cache.put(self._token(), host, bundle.to_bytes())
        logger.info("Stored new certificate for %s", host)
        return bundle

    def _token(self) -> CancellationToken:
        return CancellationToken.with_timeout(self._timeout)

    @staticmethod
    def _build_context(host: str, bundle: CertificateBundle) -> ssl.SSLContext:
        # load_cert_chain only reads from files
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
        with tempfile.TemporaryDirectory(prefix="betterlog-") as tmp:
            cert_path = Path(tmp) / "chain.pem"
            key_path = Path(tmp) / "key.pem"
            cert_path.write_bytes(bundle.chain_pem)
            key_path.write_bytes(bundle.key_pem)
            key_path.chmod(0o600)
            try:
                context.load_cert_chain(certfile=cert_path, keyfile=key_path)
            except ssl.SSLError as e:
                raise CertificateUnavailableError(host, f"invalid key pair: {e}") from e
        return context
