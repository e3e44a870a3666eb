"""
Background widget for Cartridge's main window.

Paints the selected game's background image, scaled to cover the whole
widget and centre-cropped, under a light darkening wash so the title text
stays readable.  Falls back to the theme base colour when the image cannot
be loaded.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import Qt, QRectF
from PySide6.QtGui import QColor, QPainter, QPixmap, QPixmapCache
from PySide6.QtWidgets import QWidget

from cartridge.ui.style import active_theme

log = logging.getLogger(__name__)

_SHADE_ALPHA = 90


def load_pixmap(path: str) -> QPixmap:
    """Load *path* through the global pixmap cache."""
    pm = QPixmapCache.find(path)
    if pm is None or pm.isNull():
        pm = QPixmap(path)
        if pm.isNull():
            log.debug("Could not load image %s", path)
        else:
            QPixmapCache.insert(path, pm)
    return pm


class BackgroundWidget(QWidget):
    """Aspect-cropped image fill behind all other content."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self._path = ""
        self._pixmap = QPixmap()

    # -- public API ----------------------------------------------------

    def set_image(self, path: str) -> None:
        if path == self._path:
            return
        self._path = path
        self._pixmap = load_pixmap(path) if path else QPixmap()
        self.update()

    def image_path(self) -> str:
        return self._path

    # -- painting ------------------------------------------------------

    def paintEvent(self, event) -> None:
        p = QPainter(self)
        p.fillRect(self.rect(), QColor(active_theme().bg_base))

        if not self._pixmap.isNull():
            p.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
            scaled = self._pixmap.size().scaled(
                self.size(), Qt.AspectRatioMode.KeepAspectRatioByExpanding,
            )
            x = (self.width() - scaled.width()) / 2
            y = (self.height() - scaled.height()) / 2
            p.drawPixmap(
                QRectF(x, y, scaled.width(), scaled.height()),
                self._pixmap,
                QRectF(self._pixmap.rect()),
            )
            p.fillRect(self.rect(), QColor(0, 0, 0, _SHADE_ALPHA))
        p.end()
