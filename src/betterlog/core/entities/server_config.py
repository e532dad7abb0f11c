"""Server configuration entity."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from betterlog.core.errors import ConfigError

_TRUE_VALUES = {"1", "t", "true"}
_FALSE_VALUES = {"0", "f", "false"}


@dataclass(frozen=True)
class ServerConfig:
    """Server configuration.

    One instance is built at startup (usually with ``from_env``) and
    handed to every component that needs it.

    Basic auth:
        When http_auth is set to ``user:password`` every request to the
        log endpoint must carry matching credentials.

    Secure mode:
        When ssl is True the log endpoint is served over TLS with
        certificates for ssl_hosts, persisted in the Redis store at
        redis_url under redis_prefix.
    """

    port: int = 5514
    healthz_port: int = 5513
    http_realm: str = "betterlog"
    http_auth: str = ""
    ssl: bool = False
    ssl_hosts: tuple[str, ...] = field(default_factory=tuple)
    redis_prefix: str = ""
    redis_url: str = "redis://localhost:6379"
    redis_max_retries: int = 3
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate cross-field constraints."""
        if self.http_auth and ":" not in self.http_auth:
            raise ConfigError("HTTP_AUTH must have the form user:password")
        if self.ssl and not self.ssl_hosts:
            raise ConfigError("SSL requires at least one host in SSL_HOSTS")

    @property
    def auth_enabled(self) -> bool:
        """Whether basic auth is configured."""
        return bool(self.http_auth)

    @property
    def credentials(self) -> tuple[str, str]:
        """The configured (username, password) pair."""
        username, _, password = self.http_auth.partition(":")
        return username, password

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServerConfig":
        """Build a configuration from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            A validated ServerConfig.

        Raises:
            ConfigError: If a variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        hosts = env.get("SSL_HOSTS", "")
        return cls(
            port=_parse_int(env, "PORT", defaults.port),
            healthz_port=_parse_int(env, "HEALTHZ_PORT", defaults.healthz_port),
            http_realm=env.get("HTTP_REALM", defaults.http_realm),
            http_auth=env.get("HTTP_AUTH", defaults.http_auth),
            ssl=_parse_bool(env, "SSL", defaults.ssl),
            ssl_hosts=tuple(h.strip() for h in hosts.split(",") if h.strip()),
            redis_prefix=env.get("REDIS_PREFIX", defaults.redis_prefix),
            redis_url=env.get("REDIS_URL", defaults.redis_url),
            redis_max_retries=_parse_int(
                env, "REDIS_MAX_RETRIES", defaults.redis_max_retries
            ),
            log_level=env.get("LOG_LEVEL", defaults.log_level).upper(),
        )


def _parse_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def _parse_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")
