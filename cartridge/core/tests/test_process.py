"""Tests for the QProcess-backed emulator runner."""

import sys
import time

from PySide6.QtCore import QCoreApplication

from cartridge.core.process import FAILED_TO_START, EmulatorProcess


def _wait_for(codes: list[int], timeout: float = 10.0) -> None:
    deadline = time.monotonic() + timeout
    while not codes and time.monotonic() < deadline:
        QCoreApplication.processEvents()
        time.sleep(0.01)


class TestEmulatorProcess:
    def test_reports_exit_code(self, qapp):
        proc = EmulatorProcess()
        codes: list[int] = []
        proc.exited.connect(lambda code: codes.append(code))

        proc.start(sys.executable, ["-c", "raise SystemExit(3)"])
        _wait_for(codes)

        assert codes == [3]
        assert not proc.is_running()

    def test_argument_with_spaces_passed_verbatim(self, qapp, tmp_path):
        marker = tmp_path / "out file.txt"
        script = "import sys, pathlib; pathlib.Path(sys.argv[1]).write_text('ok')"
        proc = EmulatorProcess()
        codes: list[int] = []
        proc.exited.connect(lambda code: codes.append(code))

        proc.start(sys.executable, ["-c", script, str(marker)])
        _wait_for(codes)

        assert codes == [0]
        assert marker.read_text() == "ok"

    def test_missing_program_reports_failure(self, qapp, tmp_path):
        proc = EmulatorProcess()
        codes: list[int] = []
        proc.exited.connect(lambda code: codes.append(code))

        proc.start(str(tmp_path / "no-such-emulator"), ["game.nsp"])
        _wait_for(codes)

        assert codes == [FAILED_TO_START]
        assert not proc.is_running()
