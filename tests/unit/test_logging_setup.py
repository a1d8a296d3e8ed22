import os
import logging
from logging.handlers import RotatingFileHandler

import pytest
from sensor_exporter.logging_setup import setup_logging


@pytest.fixture(autouse=True)
def clean_root_handlers():
    """Remove all root logger handlers before and after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    root.handlers.clear()
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.handlers.extend(original_handlers)
    root.setLevel(original_level)


def test_stream_only_without_log_dir():
    setup_logging()
    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert type(handlers[0]) is logging.StreamHandler


def test_creates_log_directory(tmp_path):
    log_dir = str(tmp_path / "logs")
    setup_logging(log_dir=log_dir, log_file_name="test.log")
    assert os.path.isdir(log_dir)


def test_returns_root_logger(tmp_path):
    result = setup_logging(log_dir=str(tmp_path), log_file_name="test.log")
    assert result is logging.getLogger()


def test_log_level_is_set(tmp_path):
    setup_logging(log_dir=str(tmp_path), log_file_name="test.log", log_level="DEBUG")
    assert logging.getLogger().level == logging.DEBUG


def test_lowercase_log_level_is_accepted():
    setup_logging(log_level="warning")
    assert logging.getLogger().level == logging.WARNING


def test_handlers_are_added(tmp_path):
    setup_logging(log_dir=str(tmp_path), log_file_name="test.log")
    handlers = logging.getLogger().handlers
    assert len(handlers) == 2
    file_handler = next(h for h in handlers if isinstance(h, RotatingFileHandler))
    assert file_handler.baseFilename == os.path.abspath(str(tmp_path / "test.log"))


def test_records_reach_the_log_file(tmp_path):
    setup_logging(log_dir=str(tmp_path), log_file_name="test.log")
    logging.getLogger("sensor_exporter.test").info("sensor 1 ready")
    for handler in logging.getLogger().handlers:
        handler.flush()
    content = (tmp_path / "test.log").read_text()
    assert "sensor 1 ready" in content
    assert "[sensor_exporter.test]" in content


def test_does_not_add_duplicate_handlers(tmp_path):
    setup_logging(log_dir=str(tmp_path), log_file_name="test.log")
    handler_count = len(logging.getLogger().handlers)
    setup_logging(log_dir=str(tmp_path), log_file_name="test.log")
    assert len(logging.getLogger().handlers) == handler_count
