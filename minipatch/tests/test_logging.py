"""Unit tests for logging configuration."""

import io
import logging

from minipatch.logging import setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_creates_handler(self):
        """setup_logging attaches a handler to the minipatch logger."""
        logger = logging.getLogger("minipatch")
        initial_handlers = len(logger.handlers)

        handler = setup_logging()

        assert len(logger.handlers) == initial_handlers + 1
        assert handler in logger.handlers

        logger.removeHandler(handler)

    def test_setup_logging_with_custom_level(self):
        """setup_logging respects custom log level."""
        logger = logging.getLogger("minipatch")

        handler = setup_logging(level=logging.DEBUG)

        assert logger.level == logging.DEBUG

        logger.removeHandler(handler)
        logger.setLevel(logging.WARNING)

    def test_logger_propagate_is_false(self):
        """Logger propagation is disabled to avoid duplicate logs."""
        logger = logging.getLogger("minipatch")

        handler = setup_logging()

        assert logger.propagate is False

        logger.removeHandler(handler)

    def test_setup_logging_writes_formatted_records(self):
        """Records carry level and logger name."""
        stream = io.StringIO()
        logger = logging.getLogger("minipatch")
        handler = setup_logging(level=logging.INFO, stream=stream)

        logging.getLogger("minipatch.runner").info("checked %d files", 2)

        output = stream.getvalue()
        assert "[INFO] minipatch.runner: checked 2 files" in output

        logger.removeHandler(handler)
        logger.setLevel(logging.WARNING)
