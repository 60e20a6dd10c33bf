"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from zapp.core.observability.logging_config import _parse_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParseLevel:
    def test_known(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("ERROR") == logging.ERROR

    def test_unknown_falls_back(self):
        assert _parse_level("chatty") == logging.WARNING

    def test_empty(self):
        assert _parse_level(None) == logging.WARNING
        assert _parse_level("") == logging.WARNING


class TestSetupLogging:
    def test_console_only(self):
        setup_logging(level="INFO")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.INFO

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "zapp.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert len(root.handlers) == 2
        # Root must let DEBUG records through to reach the file
        assert root.level == logging.DEBUG

        logging.getLogger("zapp.test").debug("written to file only")
        for handler in root.handlers:
            handler.flush()
        assert "written to file only" in log_file.read_text()

    def test_library_loggers_quieted(self):
        setup_logging(level="INFO")
        assert logging.getLogger("jinja2").level == logging.WARNING

    def test_debug_leaves_library_loggers(self):
        logging.getLogger("jinja2").setLevel(logging.NOTSET)
        setup_logging(level="DEBUG")
        assert logging.getLogger("jinja2").level == logging.NOTSET
