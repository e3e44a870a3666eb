import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def games_dir(tmp_path):
    """An empty games folder with an empty lookup table."""
    root = tmp_path / "games"
    root.mkdir()
    (root / "games.json").write_text("{}", encoding="utf-8")
    return root
