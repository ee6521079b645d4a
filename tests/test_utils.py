"""
Tests for utility modules.
"""

import io
import logging
from unittest.mock import patch

from src.utils.logging import setup_logger, set_global_log_level, configure_debug_logging


class TestLogging:
    """Test logging utilities."""

    def test_setup_logger_default(self):
        """Test default logger setup."""
        logger = setup_logger("test_logger")
        assert logger.name == "test_logger"
        assert logger.level == logging.INFO
        assert len(logger.handlers) > 0

    def test_setup_logger_debug(self):
        """Test debug logger setup."""
        logger = setup_logger("test_debug", level=logging.DEBUG)
        assert logger.level == logging.DEBUG

    def test_setup_logger_custom_format(self):
        """Test logger setup with custom format."""
        custom_format = "%(name)s - %(message)s"
        logger = setup_logger("test_custom", format_string=custom_format)

        handler = logger.handlers[0]
        assert handler.formatter._fmt == custom_format

    def test_setup_logger_no_timestamp(self):
        """Test logger setup without timestamp."""
        logger = setup_logger("test_no_timestamp", include_timestamp=False)

        handler = logger.handlers[0]
        assert "%(asctime)s" not in handler.formatter._fmt

    def test_setup_logger_no_duplicate_handlers(self):
        """Test that setup_logger doesn't add duplicate handlers."""
        logger1 = setup_logger("test_no_duplicate")
        logger2 = setup_logger("test_no_duplicate")

        assert logger1 is logger2
        assert len(logger1.handlers) == 1

    @patch('sys.stdout')
    def test_logger_output_stream(self, mock_stdout):
        """Test that logger uses stdout by default."""
        logger = setup_logger("test_stream")

        assert logger.handlers[0].stream == mock_stdout

    def test_logger_custom_stream(self):
        """Test that console sessions can log to another stream."""
        stream = io.StringIO()
        logger = setup_logger("test_custom_stream", level=logging.WARNING, stream=stream)

        logger.warning("Send to client timed out")
        logger.info("Client connected")

        assert "Send to client timed out" in stream.getvalue()
        assert "Client connected" not in stream.getvalue()

    def test_set_global_log_level(self):
        """Test setting global log level."""
        set_global_log_level(logging.DEBUG)

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger('src.wopr').level == logging.DEBUG

    def test_configure_debug_logging(self):
        """Test configuring debug logging."""
        configure_debug_logging()

        assert logging.getLogger().level == logging.DEBUG

    def test_logger_formatter_content(self):
        """Test logger formatter content."""
        logger = setup_logger("test_formatter")
        formatter = logger.handlers[0].formatter

        record = logging.LogRecord(
            name="test_formatter",
            level=logging.INFO,
            pathname="",
            lineno=0,
            msg="Client connected: 127.0.0.1:5555",
            args=(),
            exc_info=None
        )

        formatted = formatter.format(record)
        assert "test_formatter" in formatted
        assert "INFO" in formatted
        assert "Client connected: 127.0.0.1:5555" in formatted

    def teardown_method(self):
        """Clean up loggers after each test."""
        for logger_name in ["test_logger", "test_debug", "test_custom",
                            "test_no_timestamp", "test_no_duplicate",
                            "test_stream", "test_custom_stream", "test_formatter"]:
            logger = logging.getLogger(logger_name)
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)
        for logger_name in ['', 'src', 'src.wopr', 'src.tui']:
            logging.getLogger(logger_name).setLevel(logging.NOTSET if logger_name else logging.WARNING)
