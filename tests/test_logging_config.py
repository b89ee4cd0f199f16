"""
Tests for the central logging setup.
"""

import logging

import pytest

from fluidwrap.core.observability.logging_config import level_from_flags, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLevelFromFlags:
    def test_flags_win_over_env(self, monkeypatch):
        monkeypatch.setenv("FLUIDWRAP_LOG_LEVEL", "ERROR")
        assert level_from_flags(debug=True) == "DEBUG"
        assert level_from_flags(verbose=True) == "INFO"
        assert level_from_flags(quiet=True) == "ERROR"

    def test_env_then_default(self, monkeypatch):
        monkeypatch.setenv("FLUIDWRAP_LOG_LEVEL", "INFO")
        assert level_from_flags() == "INFO"
        monkeypatch.delenv("FLUIDWRAP_LOG_LEVEL")
        assert level_from_flags() == "WARNING"


class TestSetupLogging:
    def test_console_only(self, restore_root_logger):
        setup_logging("INFO")
        assert restore_root_logger.level == logging.INFO
        assert len(restore_root_logger.handlers) == 1

    def test_unknown_level_falls_back_to_warning(self, restore_root_logger):
        setup_logging("LOUD")
        assert restore_root_logger.level == logging.WARNING

    def test_file_handler_lowers_root_level(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "fluidwrap.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 2

        logging.getLogger("fluidwrap.test").debug("hello file")
        for h in restore_root_logger.handlers:
            h.flush()
        assert "hello file" in log_file.read_text(encoding="utf-8")
        restore_root_logger.handlers[1].close()
