# Copyright (C) 2025-2026 Cartridge Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""
Crash log and logging setup for the launcher process.

:class:`CrashLogger` replaces :data:`sys.excepthook` so an unhandled error
leaves ``cache/latest.log`` behind.  The report carries the configured
emulator and games paths because nearly every launcher crash is a bad path.

:func:`configure_logging` applies the ``debug_logging`` /
``debug_log_level`` settings to the root logger.
"""

from __future__ import annotations

import logging
import sys
import traceback
from datetime import datetime, timezone
from pathlib import Path

from cartridge import __version__
from cartridge.core.config import Config

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CRASH_LOG_NAME = "latest.log"
DEBUG_LOG_NAME = "cartridge_debug.log"


def crash_report(exc_type, exc_value, exc_tb,
                 config: Config | None = None,
                 config_file: Path | None = None) -> str:
    """Render the text written to the crash log."""
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    lines = [
        "Cartridge crash log",
        "===================",
        f"Timestamp    : {timestamp}",
        f"Version      : {__version__}",
        f"Python       : {sys.version.split()[0]}",
        f"Platform     : {sys.platform}",
    ]
    if config is None:
        lines.append("Config       : not loaded")
    else:
        lines += [
            f"Config file  : {config_file if config_file else 'default location'}",
            f"Ryujinx path : {config.ryujinx_path}",
            f"Games path   : {config.games_path}",
            f"Theme        : {config.theme}",
        ]
    lines += [f"Exception    : {exc_type.__name__}: {exc_value}", "", ""]
    tb_text = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
    return "\n".join(lines) + tb_text


class CrashLogger:
    """Writes a crash report for unhandled exceptions.

    The config is attached after install so errors raised while loading it
    are still caught.
    """

    def __init__(self, cache_dir: Path):
        self.cache_dir = Path(cache_dir)
        self.config: Config | None = None
        self.config_file: Path | None = None
        self._original_hook = None

    @property
    def log_path(self) -> Path:
        return self.cache_dir / CRASH_LOG_NAME

    def attach(self, config: Config, config_file: Path | None = None) -> None:
        self.config = config
        self.config_file = config_file

    def install(self) -> None:
        if self._original_hook is None:
            self._original_hook = sys.excepthook
            sys.excepthook = self._hook

    def uninstall(self) -> None:
        if self._original_hook is not None:
            sys.excepthook = self._original_hook
            self._original_hook = None

    def write(self, exc_type, exc_value, exc_tb) -> Path | None:
        """Write the report.  Returns the log path, or ``None`` on failure."""
        report = crash_report(exc_type, exc_value, exc_tb,
                              self.config, self.config_file)
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            self.log_path.write_text(report, encoding="utf-8")
        except OSError:
            log.error("Could not write crash log to %s", self.log_path, exc_info=True)
            return None
        return self.log_path

    def _hook(self, exc_type, exc_value, exc_tb) -> None:
        self.write(exc_type, exc_value, exc_tb)
        original = self._original_hook or sys.__excepthook__
        original(exc_type, exc_value, exc_tb)


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    if isinstance(level, int):
        return level
    log.warning("Unknown debug_log_level %r; using WARNING", name)
    return logging.WARNING


def configure_logging(config: Config, cache_dir: Path) -> Path | None:
    """Configure the root logger from *config*.

    With debug logging on, records go to ``cache/cartridge_debug.log`` and
    stderr at the configured level.  Otherwise only warnings reach stderr.
    Returns the debug log file, or ``None`` when there is none.
    """
    if not config.debug_logging:
        logging.basicConfig(level=logging.WARNING, force=True)
        return None

    level = _level_from_name(config.debug_log_level)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    log_file: Path | None = Path(cache_dir) / DEBUG_LOG_NAME
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.insert(0, logging.FileHandler(str(log_file), encoding="utf-8"))
    except OSError:
        log_file = None
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    if log_file is None:
        log.warning("Could not open debug log in %s; logging to stderr only", cache_dir)
    log.info("Cartridge %s, emulator %s, games %s",
             __version__, config.ryujinx_path, config.games_path)
    return log_file
