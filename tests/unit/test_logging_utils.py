#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_logging_utils.py
"""Unit tests for command-line logging setup."""

import logging

import pytest

from mdterm.logging_utils import configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_by_name(self, root_logger) -> None:
        configure_logging("debug")
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1

    def test_trace_format(self, root_logger) -> None:
        configure_logging(logging.INFO, trace_mode=True)
        assert "%(name)s" in root_logger.handlers[0].formatter._fmt

    def test_log_file(self, root_logger, tmp_path) -> None:
        log_file = tmp_path / "run.log"
        configure_logging(logging.INFO, log_file=str(log_file))
        logging.getLogger("mdterm.test").info("hello")
        for handler in root_logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text()

    def test_unwritable_log_file(self, root_logger, tmp_path) -> None:
        configure_logging(logging.INFO, log_file=str(tmp_path / "missing" / "run.log"))
        assert len(root_logger.handlers) == 1
