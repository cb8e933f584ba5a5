"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from macrtools.core.observability.logging_config import (
    _parse_level,
    resolve_level,
    setup_from_env,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_flags_win(self, monkeypatch):
        monkeypatch.setenv("MACRTOOLS_LOG_LEVEL", "ERROR")
        assert resolve_level(debug=True) == "DEBUG"
        assert resolve_level(verbose=True) == "INFO"

    def test_quiet(self):
        assert resolve_level(quiet=True) == "ERROR"

    def test_env_over_default(self, monkeypatch):
        monkeypatch.setenv("MACRTOOLS_LOG_LEVEL", "INFO")
        assert resolve_level() == "INFO"

    def test_default(self):
        assert resolve_level() == "WARNING"
        assert resolve_level(default="INFO") == "INFO"


class TestParseLevel:
    @pytest.mark.parametrize("name,expected", [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        (None, logging.WARNING),
        ("", logging.WARNING),
        ("loud", logging.WARNING),
    ])
    def test_parse(self, name, expected):
        assert _parse_level(name) == expected


class TestSetupLogging:
    def test_console_level(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "install.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("macrtools.test").debug("to file only")
        for h in root.handlers:
            h.flush()
        assert "to file only" in log_file.read_text()

    def test_from_env(self, monkeypatch, tmp_path: Path):
        log_file = tmp_path / "env.log"
        monkeypatch.setenv("MACRTOOLS_LOG_FILE", str(log_file))
        setup_from_env("ERROR")
        assert any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)
