"""Unit tests for logging configuration."""

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from weather_widget.logging_config import LOG_FILE, get_logger, log_with_context, setup_logging


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way it was after the test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_writes_json_records_to_log_dir(tmp_path, restore_root_logger):
    """Test structured records land as JSON in the configured directory."""
    log_dir = tmp_path / "nested" / "logs"
    setup_logging("INFO", log_dir)

    log_with_context(get_logger("weather_widget.test"), "info", "Weather search started", city="Paris")
    for handler in logging.getLogger().handlers:
        handler.flush()

    record = json.loads((log_dir / LOG_FILE).read_text(encoding="utf-8").strip().splitlines()[-1])
    assert record["message"] == "Weather search started"
    assert record["city"] == "Paris"
    assert record["levelname"] == "INFO"


def test_file_keeps_debug_records_console_does_not(tmp_path, restore_root_logger):
    """Test the file handler records debug detail while the console follows the level."""
    root = setup_logging("warning", tmp_path)

    file_handler = next(h for h in root.handlers if isinstance(h, RotatingFileHandler))
    console_handler = next(h for h in root.handlers if not isinstance(h, RotatingFileHandler))
    assert file_handler.level == logging.DEBUG
    assert console_handler.level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING


def test_unknown_level_rejected(tmp_path, restore_root_logger):
    """Test a misspelled level fails loudly instead of configuring nothing."""
    with pytest.raises(ValueError, match="Unknown log level"):
        setup_logging("LOUD", tmp_path)
