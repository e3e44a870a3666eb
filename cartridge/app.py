# Copyright (C) 2025-2026 Cartridge Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

from pathlib import Path

from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication

from cartridge.core.config import Config
from cartridge.ui.main_window import MainWindow
from cartridge.ui.style import build_stylesheet, set_theme

_ROOT = Path(__file__).resolve().parent.parent
_ICON = _ROOT / "assets" / "icon.png"


class CartridgeApp:
    """Top-level application controller for Cartridge."""

    def __init__(self, argv: list[str], config: Config | None = None):
        self._config = config if config is not None else Config.load()

        self._qt = QApplication(argv)
        self._qt.setApplicationName("Cartridge")
        self._qt.setOrganizationName("Cartridge")
        if _ICON.exists():
            self._qt.setWindowIcon(QIcon(str(_ICON)))

        set_theme(self._config.theme)
        self._qt.setStyleSheet(build_stylesheet())

        self._window = MainWindow(self._config)

    def run(self) -> int:
        """Show the main window and enter the Qt event loop."""
        if self._config.fullscreen:
            self._window.showFullScreen()
        else:
            self._window.show()
        return self._qt.exec()
