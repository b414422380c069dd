"""Tests for the logging setup."""

import logging

import pytest

from perseus.common.logger import get_logger, setup_logger


@pytest.fixture
def logger_name(request):
    """Unique logger name, cleaned up after the test."""
    name = f"test_{request.node.name}"
    yield name
    logger = logging.getLogger(f"perseus.{name}")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TestSetupLogger:
    """Tests for setup_logger."""

    def test_console_only(self, logger_name):
        """Test console handler is added and name is qualified."""
        logger = setup_logger(logger_name, level="debug")

        assert logger.name == f"perseus.{logger_name}"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_file_logging(self, logger_name, tmp_path):
        """Test rotating file handler writes into log_dir."""
        logger = setup_logger(
            logger_name,
            log_dir=str(tmp_path / "logs"),
            file_logging=True,
            console_logging=False,
        )
        logger.info("mirrored")
        for handler in logger.handlers:
            handler.flush()

        log_file = tmp_path / "logs" / f"perseus.{logger_name}.log"
        assert "[INFO]" in log_file.read_text()
        assert "mirrored" in log_file.read_text()

    def test_no_duplicate_handlers(self, logger_name):
        """Test repeated setup doesn't stack handlers."""
        setup_logger(logger_name)
        logger = setup_logger(logger_name)

        assert len(logger.handlers) == 1

    def test_invalid_level(self, logger_name):
        """Test unknown levels are rejected."""
        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logger(logger_name, level="VERBOSE")


class TestGetLogger:
    """Tests for get_logger."""

    def test_qualifies_name(self):
        """Test bare names are placed under perseus."""
        assert get_logger("satis").name == "perseus.satis"

    def test_keeps_qualified_name(self):
        """Test already qualified names are unchanged."""
        assert get_logger("perseus").name == "perseus"
        assert get_logger("perseus.satis.provider").name == "perseus.satis.provider"
