"""Tests for the walk trace logger setup."""

import logging

import pytest

from ua_treewalker import logging_config
from ua_treewalker.logging_config import (
    FlushingStreamHandler,
    TRACE_LOG_FILENAME,
    get_trace_logger,
    reset_trace_logger,
    restore_stderr_logging,
    suppress_stderr_logging,
)


@pytest.fixture
def clean_logger(monkeypatch):
    """Rebuild the trace logger without file output, and again afterwards."""
    monkeypatch.delenv("UA_TREEWALKER_LOG_DIR", raising=False)
    reset_trace_logger()
    yield
    monkeypatch.delenv("UA_TREEWALKER_LOG_DIR", raising=False)
    reset_trace_logger()


def _stderr_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, FlushingStreamHandler)]


class TestTraceLogger:
    def test_configured_once(self, clean_logger):
        logger = get_trace_logger()
        handler_count = len(logger.handlers)
        assert get_trace_logger() is logger
        assert len(logger.handlers) == handler_count

    def test_does_not_propagate(self, clean_logger):
        logger = get_trace_logger()
        assert logger.name == logging_config.TRACE_LOGGER_NAME
        assert logger.propagate is False
        assert logger.level == logging.DEBUG

    def test_no_file_without_log_dir(self, clean_logger):
        logger = get_trace_logger()
        assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        assert len(_stderr_handlers(logger)) == 1

    def test_file_in_log_dir(self, clean_logger, monkeypatch, tmp_path):
        monkeypatch.setenv("UA_TREEWALKER_LOG_DIR", str(tmp_path / "logs"))
        logger = reset_trace_logger()
        logger.info("Enter step: Up()")
        for handler in logger.handlers:
            handler.flush()

        log_file = tmp_path / "logs" / TRACE_LOG_FILENAME
        assert log_file.exists()
        assert "Enter step: Up()" in log_file.read_text(encoding="utf-8")

    def test_suppress_and_restore_stderr(self, clean_logger):
        logger = get_trace_logger()
        suppress_stderr_logging()
        assert all(h.level > logging.CRITICAL for h in _stderr_handlers(logger))
        restore_stderr_logging()
        assert all(h.level == logging.DEBUG for h in _stderr_handlers(logger))
