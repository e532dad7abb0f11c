"""Entry point: ``python -m betterlog`` or ``betterlog-server``."""

import asyncio
import logging
import sys

from betterlog.core.entities.server_config import ServerConfig
from betterlog.core.errors import CertCacheError, ConfigError
from betterlog.server import serve, setup_logging

logger = logging.getLogger("betterlog")


def main() -> None:
    try:
        config = ServerConfig.from_env()
    except ConfigError as e:
        sys.exit(f"error: {e}")

    setup_logging(config.log_level)
    try:
        asyncio.run(serve(config))
    except CertCacheError as e:
        logger.error("Cannot start secure server: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
