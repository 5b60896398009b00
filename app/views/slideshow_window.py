"""Full-screen slideshow window bound to a `PresentationController`."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QKeySequence, QPixmap, QShortcut
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget
from loguru import logger

from app.viewmodels.presentation_vm import PresentationController
from app.views.constants import (
    ICON_CLOSE,
    ICON_MUTED,
    ICON_NEXT,
    ICON_PAUSE,
    ICON_PLAY,
    ICON_PREV,
    ICON_UNMUTED,
    SLIDESHOW_BACKGROUND,
    SLIDESHOW_CONTROLS_STYLE,
)
from app.views.image_tasks import ImageTaskRunner
from core.presentation import PresentationState


class SlideshowWindow(QWidget):
    """Renders the controller state; owns no slideshow state itself.

    Closing or hiding the window closes the controller, so the timer and
    audio never outlive the window.
    """

    # Receiver signal for ImageTaskRunner
    imageLoaded = Signal(str, str, object)  # token, path, QImage

    def __init__(
        self,
        controller: PresentationController,
        image_service: Any | None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent, Qt.Window)
        self._controller = controller
        self._runner = ImageTaskRunner(service=image_service, receiver=self)
        self._pending_token: str | None = None
        self._pixmap: QPixmap | None = None
        self._shown_photo_id: str | None = None

        self.setWindowTitle("Slideshow")
        self.setStyleSheet(SLIDESHOW_BACKGROUND)
        self._setup_ui()
        self._setup_shortcuts()

        self.imageLoaded.connect(self._on_image_loaded)
        self._unsubscribe = controller.subscribe(self._render)

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._image_label = QLabel()
        self._image_label.setAlignment(Qt.AlignCenter)
        self._image_label.setMinimumSize(1, 1)
        layout.addWidget(self._image_label, 1)

        controls = QWidget(self)
        controls.setObjectName("controls")
        controls.setStyleSheet(SLIDESHOW_CONTROLS_STYLE)
        row = QHBoxLayout(controls)

        self._play_button = QPushButton(ICON_PLAY)
        self._play_button.clicked.connect(self._controller.toggle_play)
        row.addWidget(self._play_button)

        self._mute_button = QPushButton(ICON_UNMUTED)
        self._mute_button.clicked.connect(self._controller.toggle_mute)
        row.addWidget(self._mute_button)

        self._audio_label = QLabel("")
        row.addWidget(self._audio_label)

        row.addStretch(1)

        prev_button = QPushButton(ICON_PREV)
        prev_button.clicked.connect(self._controller.prev)
        row.addWidget(prev_button)

        self._counter = QLabel("")
        row.addWidget(self._counter)

        next_button = QPushButton(ICON_NEXT)
        next_button.clicked.connect(self._controller.next)
        row.addWidget(next_button)

        row.addStretch(1)

        close_button = QPushButton(ICON_CLOSE)
        close_button.clicked.connect(self.close)
        row.addWidget(close_button)

        layout.addWidget(controls)

    def _setup_shortcuts(self) -> None:
        bindings = {
            "Space": self._controller.toggle_play,
            "Right": self._controller.next,
            "Left": self._controller.prev,
            "M": self._controller.toggle_mute,
            "Escape": self.close,
        }
        for key, handler in bindings.items():
            shortcut = QShortcut(QKeySequence(key), self)
            shortcut.activated.connect(handler)

    # Rendering

    def _render(self, state: PresentationState | None) -> None:
        if state is None:
            if self.isVisible():
                self.close()
            return
        self._play_button.setText(ICON_PAUSE if state.playing else ICON_PLAY)
        self._mute_button.setText(ICON_MUTED if state.muted else ICON_UNMUTED)
        self._audio_label.setText("(no audio)" if state.audio_error else "")
        self._counter.setText(f"{state.current_index + 1} / {state.length}")

        photo = state.current_photo
        self.setWindowTitle(photo.title or "Slideshow")
        self._image_label.setToolTip(photo.title)
        if photo.id != self._shown_photo_id:
            self._shown_photo_id = photo.id
            self._pending_token = self._runner.request_slide(photo.id, photo.path)

    def _on_image_loaded(self, token: str, _path: str, image: Any) -> None:
        if token != self._pending_token:
            return
        if image is None:
            self._pixmap = None
            self._image_label.setText("(failed)")
            return
        pm = QPixmap.fromImage(image)
        if pm.isNull():
            self._pixmap = None
            self._image_label.setText("(failed)")
            return
        self._pixmap = pm
        self._apply_pixmap_fit()

    def _apply_pixmap_fit(self) -> None:
        if self._pixmap is None:
            return
        size = self._image_label.size()
        self._image_label.setPixmap(
            self._pixmap.scaled(size, Qt.KeepAspectRatio, Qt.SmoothTransformation)
        )

    # Qt events

    def showEvent(self, event) -> None:  # type: ignore[override]
        super().showEvent(event)
        self._render(self._controller.state)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._apply_pixmap_fit()

    def hideEvent(self, event) -> None:  # type: ignore[override]
        # minimizing is spontaneous and keeps the slideshow running
        if not event.spontaneous():
            self._shutdown()
        super().hideEvent(event)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._shutdown()
        event.accept()

    def dispose(self) -> None:
        """Detach from the controller; the window is not reused afterwards."""
        self._unsubscribe()
        self._shutdown()

    def _shutdown(self) -> None:
        if self._controller.is_open:
            logger.debug("Slideshow window closing, releasing presentation")
            self._controller.close()
        self._shown_photo_id = None
        self._pending_token = None
        self._pixmap = None
        self._image_label.clear()
