"""
Emulator process handling.

Runs Ryujinx through :class:`QProcess` so the exit notification arrives on
the Qt event loop, the same thread that drives navigation.  Only one
subscription exists: the process's exit code.  Cartridge never kills or
times out a running emulator.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QProcess, Signal

log = logging.getLogger(__name__)

FAILED_TO_START = -1


class EmulatorProcess(QObject):
    """Starts one external program and reports its exit code."""

    exited = Signal(int)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._proc: QProcess | None = None

    def is_running(self) -> bool:
        return (
            self._proc is not None
            and self._proc.state() != QProcess.ProcessState.NotRunning
        )

    def start(self, program: str, args: list[str]) -> None:
        """Start *program* with *args*.  No shell is involved."""
        proc = QProcess(self)
        proc.setProgram(program)
        proc.setArguments(args)
        proc.finished.connect(self._on_finished)
        proc.errorOccurred.connect(self._on_error)
        self._proc = proc
        log.info("Starting %s %s", program, args)
        proc.start()

    # -- internals -----------------------------------------------------

    def _on_finished(self, exit_code: int, exit_status: QProcess.ExitStatus) -> None:
        if exit_status == QProcess.ExitStatus.CrashExit:
            log.warning("Emulator crashed (exit code %d)", exit_code)
        self._release()
        self.exited.emit(exit_code)

    def _on_error(self, error: QProcess.ProcessError) -> None:
        # finished() is not emitted when the program never started.
        if error != QProcess.ProcessError.FailedToStart:
            return
        program = self._proc.program() if self._proc else "?"
        log.error("Failed to start %s: %s", program,
                  self._proc.errorString() if self._proc else error)
        self._release()
        self.exited.emit(FAILED_TO_START)

    def _release(self) -> None:
        if self._proc is not None:
            self._proc.deleteLater()
            self._proc = None
