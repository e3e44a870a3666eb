"""Tests for the crash log and logging setup."""

import logging
import sys

import pytest

from cartridge import __version__
from cartridge.core.config import Config
from cartridge.core.diagnostics import (
    CRASH_LOG_NAME,
    DEBUG_LOG_NAME,
    CrashLogger,
    configure_logging,
    crash_report,
)


def _exc_info():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        return sys.exc_info()


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if isinstance(handler, logging.FileHandler) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class TestCrashReport:
    def test_includes_configured_paths(self, tmp_path):
        cfg = Config(ryujinx_path="C:/Ryujinx/Ryujinx.exe", games_path="D:/Switch")
        text = crash_report(*_exc_info(), cfg, tmp_path / "config.json")

        assert text.startswith("Cartridge crash log\n")
        assert f"Version      : {__version__}" in text
        assert "Ryujinx path : C:/Ryujinx/Ryujinx.exe" in text
        assert "Games path   : D:/Switch" in text
        assert str(tmp_path / "config.json") in text
        assert "RuntimeError: boom" in text
        assert "Traceback (most recent call last)" in text

    def test_without_config(self):
        text = crash_report(*_exc_info())
        assert "Config       : not loaded" in text
        assert "Games path" not in text


class TestCrashLogger:
    def test_hook_writes_log_and_chains(self, tmp_path, monkeypatch):
        seen = []
        monkeypatch.setattr(sys, "excepthook", lambda *exc: seen.append(exc[0]))
        logger = CrashLogger(tmp_path / "cache")
        logger.install()
        logger.attach(Config(games_path="/games"))
        try:
            sys.excepthook(*_exc_info())
        finally:
            logger.uninstall()

        written = (tmp_path / "cache" / CRASH_LOG_NAME).read_text(encoding="utf-8")
        assert "Games path   : /games" in written
        assert seen == [RuntimeError]

    def test_uninstall_restores_hook(self, tmp_path, monkeypatch):
        def hook(*exc):
            pass

        monkeypatch.setattr(sys, "excepthook", hook)
        logger = CrashLogger(tmp_path)
        logger.install()
        assert sys.excepthook is not hook
        logger.uninstall()
        assert sys.excepthook is hook

    def test_unwritable_cache_is_reported(self, tmp_path):
        blocker = tmp_path / "cache"
        blocker.write_text("not a folder", encoding="utf-8")
        assert CrashLogger(blocker).write(*_exc_info()) is None


class TestConfigureLogging:
    def test_debug_off_keeps_warning_level(self, tmp_path, restore_root_logger):
        assert configure_logging(Config(), tmp_path) is None
        assert restore_root_logger.level == logging.WARNING
        assert not (tmp_path / DEBUG_LOG_NAME).exists()

    def test_debug_on_writes_file(self, tmp_path, restore_root_logger):
        cfg = Config(debug_logging=True, debug_log_level="info", games_path="/games")
        log_file = configure_logging(cfg, tmp_path / "cache")

        assert log_file == tmp_path / "cache" / DEBUG_LOG_NAME
        assert restore_root_logger.level == logging.INFO
        logging.getLogger("cartridge.test").info("hello from the test")
        for handler in restore_root_logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "hello from the test" in text
        assert "games /games" in text

    def test_unknown_level_falls_back(self, tmp_path, restore_root_logger):
        cfg = Config(debug_logging=True, debug_log_level="LOUD")
        configure_logging(cfg, tmp_path)
        assert restore_root_logger.level == logging.WARNING
