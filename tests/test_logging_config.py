# ABOUTME: Tests for the stderr logging setup used by the stdio server.
# ABOUTME: Restores the root logger after each test so pytest's own capture is unaffected.

import logging
import sys

import pytest

from ipma_mcp.logging_config import LOG_FORMAT, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestConfigureLogging:
    def test_single_stderr_handler(self, restore_root_logger):
        """Logging goes to stderr only, so stdout stays reserved for the protocol stream.

        Implementation: Configures logging and inspects the root handlers.
        Passing implies: Exactly one handler is installed and it writes to sys.stderr.
        """
        configure_logging("DEBUG")

        handlers = restore_root_logger.handlers
        assert len(handlers) == 1
        assert handlers[0].stream is sys.stderr
        assert handlers[0].formatter._fmt == LOG_FORMAT
        assert restore_root_logger.level == logging.DEBUG

    def test_httpx_request_logs_are_quieted(self, restore_root_logger):
        configure_logging("INFO")
        assert logging.getLogger("httpx").level == logging.WARNING
