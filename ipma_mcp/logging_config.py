# ABOUTME: Logging setup for the stdio tool server.
# ABOUTME: Sends every record to stderr so stdout stays free for protocol messages.

import logging
import sys

from ipma_mcp.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that otherwise attach their own handlers
_SHARED_LOGGERS = ("httpx", "mcp")


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Install a single stderr handler on the root logger."""
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    for name in _SHARED_LOGGERS:
        logger = logging.getLogger(name)
        for existing in logger.handlers[:]:
            logger.removeHandler(existing)
        logger.propagate = True
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
