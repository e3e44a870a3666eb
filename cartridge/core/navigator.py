# Copyright (C) 2025-2026 Cartridge Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""
Selection and launch state for the game strip.

:class:`Navigator` owns everything the UI needs to know about "which game
is highlighted" and "is a game running":

*  the catalog it indexes into,
*  the current index (``None`` while the catalog is empty),
*  the single-flight launch latch.

All mutation happens on the Qt event-loop thread (key presses, mouse
events, the gamepad poll timer and the emulator's exit notification), so
the latch is a plain boolean.  Redraws are driven by the signals below.
"""

from __future__ import annotations

import logging
from typing import Protocol

from PySide6.QtCore import QObject, Signal, SignalInstance

from cartridge.core.catalog import GameRecord

log = logging.getLogger(__name__)


class ProcessRunner(Protocol):
    """What the Navigator needs from the process-spawning side."""

    exited: SignalInstance

    def start(self, program: str, args: list[str]) -> None: ...


class Navigator(QObject):
    """Bounded left/right selection over a catalog plus the launch latch."""

    selection_changed = Signal(object)     # GameRecord
    info_updated = Signal(str)             # selected game's name
    background_changed = Signal(str)       # selected game's background path
    launch_started = Signal()
    launch_ended = Signal(int)             # emulator exit code

    def __init__(
        self,
        runner: ProcessRunner,
        emulator_path: str,
        catalog: list[GameRecord] | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._runner = runner
        self._emulator_path = emulator_path
        self._catalog: list[GameRecord] = []
        self._index: int | None = None
        self._launching = False
        runner.exited.connect(self._on_process_exited)
        if catalog:
            self.set_catalog(catalog)

    # -- State -------------------------------------------------------------

    @property
    def catalog(self) -> list[GameRecord]:
        return list(self._catalog)

    @property
    def index(self) -> int | None:
        return self._index

    @property
    def is_launching(self) -> bool:
        return self._launching

    def current(self) -> GameRecord | None:
        if self._index is None:
            return None
        return self._catalog[self._index]

    def set_catalog(self, catalog: list[GameRecord]) -> None:
        """Replace the catalog after a full rescan and highlight the first game."""
        self._catalog = list(catalog)
        self._index = None
        if self._catalog:
            self._set_index(0)

    # -- Navigation --------------------------------------------------------

    def move_left(self) -> bool:
        if self._index is None or self._index <= 0:
            return False
        self._set_index(self._index - 1)
        return True

    def move_right(self) -> bool:
        if self._index is None or self._index >= len(self._catalog) - 1:
            return False
        self._set_index(self._index + 1)
        return True

    def select(self, index: int) -> bool:
        """Highlight *index* directly (mouse hover / click).

        Out-of-range indices and the already-selected index are ignored.
        """
        if not 0 <= index < len(self._catalog):
            log.debug("Ignoring out-of-range selection %d", index)
            return False
        if index == self._index:
            return False
        self._set_index(index)
        return True

    def _set_index(self, index: int) -> None:
        self._index = index
        game = self._catalog[index]
        self.selection_changed.emit(game)
        self.info_updated.emit(game.name)
        self.background_changed.emit(game.background)

    # -- Launch ------------------------------------------------------------

    def launch(self) -> bool:
        """Start the emulator on the selected game.

        Returns ``False`` without doing anything when nothing is selected
        or a game is already running.
        """
        game = self.current()
        if game is None:
            return False
        if self._launching:
            log.info("A game is already running; ignoring launch of %s", game.name)
            return False

        self._launching = True
        self.launch_started.emit()
        log.info("Launching %s (%s)", game.name, game.title_id or "no title id")
        self._runner.start(self._emulator_path, [game.path])
        return True

    def _on_process_exited(self, code: int) -> None:
        if not self._launching:
            return
        self._launching = False
        if code == 0:
            log.info("Ryujinx exited with code %d", code)
        else:
            log.warning("Ryujinx exited with code %d", code)
        self.launch_ended.emit(code)
