"""
Tests for logger setup.
"""

import logging

from touchmath.utils.logger import get_logger, setup_logger


class TestLogger:
    """Tests for setup_logger and get_logger."""

    def test_level_and_handler(self):
        """Test that the level is applied and a console handler installed."""
        logger = setup_logger("touchmath.test.level", level="DEBUG")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.DEBUG
        assert not logger.propagate

    def test_repeated_setup_replaces_handlers(self):
        """Test that reconfiguring does not stack handlers."""
        setup_logger("touchmath.test.dupes")
        logger = setup_logger("touchmath.test.dupes", level="INFO")

        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO
        assert logger.handlers[0].level == logging.INFO

    def test_unknown_level_falls_back(self):
        """Test that an unknown level name means WARNING."""
        logger = setup_logger("touchmath.test.unknown", level="LOUD")

        assert logger.level == logging.WARNING

    def test_lowercase_level(self):
        """Test that level names are case-insensitive."""
        assert setup_logger("touchmath.test.lower", level="error").level == logging.ERROR

    def test_file_output(self, tmp_path):
        """Test that records are appended to the log file."""
        log_file = tmp_path / "touchmath.log"
        logger = setup_logger("touchmath.test.file", level="INFO", log_file=log_file)

        logger.info("hello")

        assert len(logger.handlers) == 2
        assert "hello" in log_file.read_text(encoding="utf-8")

    def test_file_added_on_reconfigure(self, tmp_path):
        """Test that a later call can add a log file to a configured logger."""
        setup_logger("touchmath.test.later", level="INFO")
        log_file = tmp_path / "later.log"
        logger = setup_logger("touchmath.test.later", level="INFO", log_file=log_file)

        logger.info("second")

        assert "second" in log_file.read_text(encoding="utf-8")

    def test_get_logger(self):
        """Test that get_logger returns the named logger."""
        assert get_logger("touchmath.core").name == "touchmath.core"
