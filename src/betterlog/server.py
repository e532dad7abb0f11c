"""Server wiring: log relay, health listener and automatic TLS."""

import asyncio
import logging
import sys

import uvicorn

from betterlog.adapters.fastapi.app import create_app
from betterlog.adapters.fastapi.healthz import create_healthz_app
from betterlog.core.entities.server_config import ServerConfig
from betterlog.core.interfaces.key_value_store import IKeyValueStore
from betterlog.core.services.cert_cache import CertCache
from betterlog.core.services.health import HealthReporter
from betterlog.infrastructure.stores.redis import RedisStore
from betterlog.infrastructure.tls.manager import CertificateManager, Issuer

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DRAIN_TIMEOUT = 5.0


def setup_logging(level: str = "INFO") -> None:
    """Send all log records, uvicorn's included, to stderr.

    stdout carries relayed log lines only.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        u_logger = logging.getLogger(logger_name)
        u_logger.handlers = []
        u_logger.propagate = True


def _server(app: object, port: int) -> uvicorn.Config:
    return uvicorn.Config(app, host="0.0.0.0", port=port, log_config=None)  # type: ignore[arg-type]


async def serve(
    config: ServerConfig,
    store: IKeyValueStore | None = None,
    issuer: Issuer | None = None,
) -> None:
    """Run the log relay and the health listener until shutdown.

    Args:
        config: Server configuration.
        store: Certificate store for secure mode. Defaults to Redis at
            config.redis_url. Its ping backs the health endpoint, and it
            is closed on exit.
        issuer: Obtains certificates for hosts missing from the store.
    """
    reporter = HealthReporter()
    health_config = _server(create_healthz_app(reporter), config.healthz_port)
    main_config = _server(create_app(config), config.port)

    cache: CertCache | None = None
    try:
        if config.ssl:
            logger.info("Starting SSL AutoTLS service.")
            if store is None:
                store = RedisStore(config.redis_url, max_retries=config.redis_max_retries)
            reporter.add_check(store.ping)
            cache = CertCache(store, prefix=config.redis_prefix)
            manager = CertificateManager(cache, config.ssl_hosts, issuer=issuer)
            await manager.load()
            # uvicorn only builds contexts from files; swap in the SNI-aware one
            main_config.load()
            main_config.ssl = manager.ssl_context()

        logger.info("Starting :%d/healthz", config.healthz_port)
        servers = [uvicorn.Server(health_config), uvicorn.Server(main_config)]
        await asyncio.gather(*(server.serve() for server in servers))
    finally:
        if cache is not None:
            pending = await cache.drain(timeout=DRAIN_TIMEOUT)
            if pending:
                logger.warning("%d certificate store calls still running at exit", pending)
        if store is not None:
            await store.close()
