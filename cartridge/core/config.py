# Copyright (C) 2025-2026 Cartridge Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""
Persistent application configuration for Cartridge.

Settings are stored as ``config.json`` in the OS-appropriate config
directory (``%LOCALAPPDATA%/Cartridge`` on Windows).  The two paths the launcher
needs start out as the sentinel ``"none"``; the user edits the file by hand
and restarts.

Example document::

    {
      "ryujinx_path": "C:/Emulators/Ryujinx/Ryujinx.exe",
      "games_path": "D:/Switch"
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from PySide6.QtCore import QStandardPaths

from cartridge.core.catalog import LOOKUP_FILE, MEDIA_DIR
from cartridge.core.errors import ConfigError

log = logging.getLogger(__name__)


# -- Defaults --------------------------------------------------------------

_APP_DIR_NAME = "Cartridge"
_CONFIG_FILE = "config.json"

UNSET = "none"


def config_dir() -> Path:
    """Return (and create) the per-user config directory."""
    # GenericConfigLocation does not depend on QCoreApplication's name,
    # which is not set yet when the config is first read in main.py.
    base = QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.GenericConfigLocation,
    )
    path = Path(base) / _APP_DIR_NAME
    path.mkdir(parents=True, exist_ok=True)
    return path


def config_path() -> Path:
    return config_dir() / _CONFIG_FILE


# -- Config data -----------------------------------------------------------

@dataclass
class Config:
    """All user-facing settings.  Serialises to / from JSON."""

    # Paths ("none" = not set yet)
    ryujinx_path: str = UNSET
    games_path: str = UNSET

    # Window
    fullscreen: bool = True
    theme: str = "Default"             # Default / Neon / Light

    # Input
    gamepad_poll_ms: int = 100

    # Debug
    debug_logging: bool = False
    debug_log_level: str = "WARNING"     # DEBUG / INFO / WARNING / ERROR

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> Config:
        """Load from disk.

        A missing file is created with the defaults.  A file that cannot be
        read or parsed is logged and the defaults are returned, so a typo
        in the document never stops the launcher from starting.  Unknown
        keys are ignored and a value of the wrong type falls back to the
        field default.
        """
        path = path or config_path()
        if not path.exists():
            cfg = cls()
            try:
                cfg.save(path)
            except ConfigError:
                log.warning("Could not write default config", exc_info=True)
            return cfg
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            log.error("Could not read config file %s; using defaults", path, exc_info=True)
            return cls()
        if not isinstance(raw, dict):
            log.error("Config file %s does not hold a JSON object; using defaults", path)
            return cls()
        return cls(**cls._checked_values(raw))

    @classmethod
    def _checked_values(cls, raw: dict) -> dict:
        """Keep the known keys whose value has the type of the field default."""
        values = {}
        for f in fields(cls):
            if f.name not in raw:
                continue
            value = raw[f.name]
            expected = type(f.default)
            # bool is an int subclass; neither may stand in for the other
            if isinstance(value, expected) and isinstance(value, bool) == (expected is bool):
                values[f.name] = value
            else:
                log.warning(
                    "Config key %r has invalid value %r; using default %r",
                    f.name, value, f.default,
                )
        return values

    def save(self, path: Path | None = None) -> None:
        """Write current settings to disk."""
        path = path or config_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps(asdict(self), indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as exc:
            raise ConfigError(f"Cannot write {path}: {exc}") from exc

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def paths_configured(self) -> bool:
        """True once both the emulator and the games folder are set."""
        return self.ryujinx_path != UNSET and self.games_path != UNSET

    @property
    def lookup_path(self) -> Path:
        return Path(self.games_path) / LOOKUP_FILE


def media_folder_has_png(games_path: str | Path) -> bool:
    """True if ``media/`` exists and contains at least one ``.png`` cover."""
    media = Path(games_path) / MEDIA_DIR
    try:
        return media.is_dir() and any(
            p.suffix == ".png" for p in media.iterdir()
        )
    except OSError:
        log.debug("Could not list %s", media, exc_info=True)
        return False
