from __future__ import annotations

import logging

from PySide6.QtCore import (
    Qt, QEasingCurve, QPoint, QPropertyAnimation, QTimer, Signal,
)
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QFrame, QHBoxLayout, QLabel, QMainWindow, QScrollArea, QVBoxLayout, QWidget,
)

from cartridge import __version__
from cartridge.core.catalog import (
    DEFAULT_COVER, GameRecord, build_catalog, list_media_images,
)
from cartridge.core.config import Config, config_path, media_folder_has_png
from cartridge.core.input_manager import InputManager, NavAction
from cartridge.core.navigator import Navigator
from cartridge.core.process import EmulatorProcess
from cartridge.ui.background import BackgroundWidget, load_pixmap
from cartridge.ui.style import CARD_HEIGHT, CARD_SPACING, CARD_WIDTH, HIGHLIGHT_WIDTH

log = logging.getLogger(__name__)

_TOAST_VISIBLE_MS = 2000
_TOAST_SLIDE_MS = 500


class GameCard(QWidget):
    """Cover image with the file-type badge pinned to its corner."""

    clicked = Signal(int)
    activated = Signal(int)

    def __init__(self, index: int, game: GameRecord, parent: QWidget | None = None):
        super().__init__(parent)
        self._index = index
        self.setFixedSize(CARD_WIDTH, CARD_HEIGHT)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setToolTip(game.name)

        self._cover = QLabel(self)
        self._cover.setObjectName("gameCover")
        self._cover.setGeometry(0, 0, CARD_WIDTH, CARD_HEIGHT)
        self._cover.setAlignment(Qt.AlignmentFlag.AlignCenter)
        inner = CARD_WIDTH - 2 * HIGHLIGHT_WIDTH
        # the default cover has no title on it
        pm = QPixmap() if game.cover == DEFAULT_COVER else load_pixmap(game.cover)
        if pm.isNull():
            self._cover.setText(game.name)
            self._cover.setWordWrap(True)
        else:
            self._cover.setPixmap(pm.scaled(
                inner, inner,
                Qt.AspectRatioMode.KeepAspectRatioByExpanding,
                Qt.TransformationMode.SmoothTransformation,
            ).copy(0, 0, inner, inner))

        self._badge = QLabel(game.badge, self)
        self._badge.setObjectName("extensionBadge")
        self._badge.adjustSize()
        self._badge.move(CARD_WIDTH - self._badge.width() - 10, 10)

    def set_highlighted(self, on: bool) -> None:
        self._cover.setProperty("highlighted", on)
        # Re-polish so the dynamic property is picked up by the stylesheet
        self._cover.style().unpolish(self._cover)
        self._cover.style().polish(self._cover)

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit(self._index)
        super().mousePressEvent(event)

    def mouseDoubleClickEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.activated.emit(self._index)
        super().mouseDoubleClickEvent(event)


class MainWindow(QMainWindow):
    """
    Fullscreen game strip for Cartridge.

    The window is a pure consumer of :class:`Navigator` signals: it never
    tracks the selection itself.  Keyboard, mouse and gamepad input are all
    forwarded to the navigator.
    """

    DEFAULT_WIDTH = 1280
    DEFAULT_HEIGHT = 720

    def __init__(self, config: Config):
        super().__init__()
        self._config = config
        self._cards: list[GameCard] = []

        self._runner = EmulatorProcess(self)
        self._navigator = Navigator(self._runner, config.ryujinx_path, parent=self)
        self._navigator.selection_changed.connect(self._highlight_game)
        self._navigator.info_updated.connect(self._show_game_info)
        self._navigator.background_changed.connect(self._change_background)
        self._navigator.launch_started.connect(self._show_loading_popup)
        self._navigator.launch_ended.connect(self._hide_loading_popup)

        self._init_window()
        self._init_central_widget()
        self._init_loading_popup()
        self._init_gamepad_toast()

        self._pad_timer = QTimer(self)
        self._pad_timer.setInterval(max(16, config.gamepad_poll_ms))
        self._pad_timer.timeout.connect(self._poll_gamepads)

        # Scan on the next event-loop tick so the window paints first.
        QTimer.singleShot(0, self._init_services)

    @property
    def navigator(self) -> Navigator:
        return self._navigator

    # ------------------------------------------------------------------
    # Initialisation helpers
    # ------------------------------------------------------------------

    def _init_window(self) -> None:
        self.setWindowTitle("Cartridge")
        self.resize(self.DEFAULT_WIDTH, self.DEFAULT_HEIGHT)

    def _init_central_widget(self) -> None:
        central = QWidget()

        # Background layer (behind all content)
        self._bg_widget = BackgroundWidget(central)
        self._bg_widget.lower()

        root = QVBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)
        root.addStretch(1)

        # -- Info panel ------------------------------------------------
        info = QWidget()
        info_layout = QVBoxLayout(info)
        info_layout.setContentsMargins(60, 0, 60, 12)
        info_layout.setSpacing(6)
        self._info_title = QLabel("")
        self._info_title.setObjectName("gameInfoTitle")
        info_layout.addWidget(self._info_title)
        line = QFrame()
        line.setObjectName("gameInfoLine")
        line.setFrameShape(QFrame.Shape.HLine)
        info_layout.addWidget(line)
        self._info_panel = info
        root.addWidget(info)

        # -- Game strip ------------------------------------------------
        self._strip = QWidget()
        self._strip_layout = QHBoxLayout(self._strip)
        self._strip_layout.setContentsMargins(60, 10, 60, 10)
        self._strip_layout.setSpacing(CARD_SPACING)
        self._strip_layout.addStretch(1)

        self._scroll = QScrollArea()
        self._scroll.setWidget(self._strip)
        self._scroll.setWidgetResizable(True)
        self._scroll.setFixedHeight(CARD_HEIGHT + 20)
        self._scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self._scroll.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self._scroll.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        root.addWidget(self._scroll)

        # -- Empty state -----------------------------------------------
        self._empty_label = QLabel("")
        self._empty_label.setObjectName("emptyMessage")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty_label.setWordWrap(True)
        self._empty_label.hide()
        root.addWidget(self._empty_label)

        root.addStretch(1)

        # -- Footer ----------------------------------------------------
        footer = QWidget()
        footer.setObjectName("footer")
        footer.setAttribute(Qt.WidgetAttribute.WA_StyledBackground)
        footer_layout = QHBoxLayout(footer)
        footer_layout.setContentsMargins(10, 4, 10, 4)
        version_label = QLabel(f"v{__version__}")
        version_label.setObjectName("footerVersion")
        footer_layout.addWidget(version_label)
        footer_layout.addStretch()
        root.addWidget(footer)

        # Keep background widget sized to central widget
        _orig_resize = central.resizeEvent
        def _on_central_resize(event, _orig=_orig_resize):
            self._bg_widget.setGeometry(0, 0, central.width(), central.height())
            if _orig:
                _orig(event)
        central.resizeEvent = _on_central_resize

        self.setCentralWidget(central)

    def _init_loading_popup(self) -> None:
        self._loading = QWidget(self)
        self._loading.setObjectName("loadingPopup")
        self._loading.setAttribute(Qt.WidgetAttribute.WA_StyledBackground)
        outer = QVBoxLayout(self._loading)
        outer.setAlignment(Qt.AlignmentFlag.AlignCenter)
        box = QFrame()
        box.setObjectName("loadingBox")
        box_layout = QVBoxLayout(box)
        box_layout.addWidget(QLabel("Launching Ryujinx…"))
        outer.addWidget(box)
        self._loading.hide()

    def _init_gamepad_toast(self) -> None:
        self._toast = QLabel(self)
        self._toast.setObjectName("gamepadToast")
        self._toast.hide()
        self._toast_anim = QPropertyAnimation(self._toast, b"pos", self)
        self._toast_anim.setDuration(_TOAST_SLIDE_MS)
        self._toast_anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._toast_anim.finished.connect(self._on_toast_anim_finished)
        self._toast_timer = QTimer(self)
        self._toast_timer.setSingleShot(True)
        self._toast_timer.timeout.connect(self._retract_toast)

    def _init_services(self) -> None:
        """Scan the games folder and start gamepad polling."""
        cfg = self._config
        if not cfg.paths_configured():
            log.error(
                "ryujinx_path and games_path are not set in %s", config_path(),
            )
            self._show_empty(
                "The paths in config.json are not set.\n"
                f"Please set ryujinx_path and games_path in {config_path()}"
            )
        else:
            if not media_folder_has_png(cfg.games_path):
                log.warning(
                    "The media folder in %s does not contain any PNG images",
                    cfg.games_path,
                )
            self._prefetch_covers()
            self.reload_catalog()

        if InputManager.instance().ensure_ready():
            self._pad_timer.start()

    def _prefetch_covers(self) -> None:
        for path in list_media_images(self._config.games_path):
            load_pixmap(str(path))

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def reload_catalog(self) -> None:
        """Rescan the games folder and rebuild the strip from scratch."""
        catalog = build_catalog(self._config.games_path, self._config.lookup_path)

        for card in self._cards:
            self._strip_layout.removeWidget(card)
            card.deleteLater()
        self._cards.clear()

        for index, game in enumerate(catalog):
            card = GameCard(index, game)
            card.clicked.connect(self._navigator.select)
            card.activated.connect(self._on_card_activated)
            self._strip_layout.insertWidget(index, card)
            self._cards.append(card)

        if catalog:
            self._empty_label.hide()
            self._info_panel.show()
            self._scroll.show()
        else:
            self._show_empty(f"No games found in {self._config.games_path}")

        self._navigator.set_catalog(catalog)

    def _show_empty(self, message: str) -> None:
        self._empty_label.setText(message)
        self._info_title.setText("")
        self._bg_widget.set_image("")
        self._empty_label.show()
        self._info_panel.hide()
        self._scroll.hide()

    def _on_card_activated(self, index: int) -> None:
        self._navigator.select(index)
        self._navigator.launch()

    # ------------------------------------------------------------------
    # Navigator slots
    # ------------------------------------------------------------------

    def _highlight_game(self, game: GameRecord) -> None:
        index = self._navigator.index
        for i, card in enumerate(self._cards):
            card.set_highlighted(i == index)
        if index is not None and index < len(self._cards):
            self._scroll.ensureWidgetVisible(self._cards[index], CARD_WIDTH, 0)

    def _show_game_info(self, name: str) -> None:
        self._info_title.setText(name)

    def _change_background(self, path: str) -> None:
        self._bg_widget.set_image(path)

    def _show_loading_popup(self) -> None:
        self._loading.setGeometry(0, 0, self.width(), self.height())
        self._loading.show()
        self._loading.raise_()

    def _hide_loading_popup(self, exit_code: int) -> None:
        self._loading.hide()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _poll_gamepads(self) -> None:
        result = InputManager.instance().poll()
        for _ in result.connected:
            self.show_gamepad_notification("Gamepad connected")
        for _ in result.disconnected:
            self.show_gamepad_notification("Gamepad disconnected")
        for action in result.actions:
            self._dispatch(action)

    def _dispatch(self, action: NavAction) -> None:
        if action is NavAction.LEFT:
            self._navigator.move_left()
        elif action is NavAction.RIGHT:
            self._navigator.move_right()
        elif action is NavAction.LAUNCH:
            self._navigator.launch()

    def keyPressEvent(self, event) -> None:
        key = event.key()
        if key == Qt.Key.Key_Left:
            self._dispatch(NavAction.LEFT)
        elif key == Qt.Key.Key_Right:
            self._dispatch(NavAction.RIGHT)
        elif key in (Qt.Key.Key_Return, Qt.Key.Key_Enter, Qt.Key.Key_Space):
            self._dispatch(NavAction.LAUNCH)
        elif key == Qt.Key.Key_F5 and self._config.paths_configured():
            self.reload_catalog()
        elif key == Qt.Key.Key_Escape:
            self.close()
        else:
            super().keyPressEvent(event)

    # ------------------------------------------------------------------
    # Gamepad toast
    # ------------------------------------------------------------------

    def show_gamepad_notification(self, message: str) -> None:
        """Slide a short message in from the top edge for two seconds."""
        self._toast.setText(message)
        self._toast.adjustSize()
        x = (self.width() - self._toast.width()) // 2
        self._toast.move(x, -self._toast.height())
        self._toast.show()
        self._toast.raise_()
        self._animate_toast(QPoint(x, 0))
        self._toast_timer.start(_TOAST_VISIBLE_MS)

    def _retract_toast(self) -> None:
        self._animate_toast(QPoint(self._toast.x(), -self._toast.height()))

    def _animate_toast(self, end: QPoint) -> None:
        self._toast_anim.stop()
        self._toast_anim.setEndValue(end)
        self._toast_anim.start()

    def _on_toast_anim_finished(self) -> None:
        # hidden once fully retracted above the top edge
        if self._toast.y() < 0:
            self._toast.hide()

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        if hasattr(self, "_loading") and self._loading.isVisible():
            self._loading.setGeometry(0, 0, self.width(), self.height())

    def closeEvent(self, event) -> None:
        self._pad_timer.stop()
        InputManager.instance().shutdown()
        event.accept()
