from __future__ import annotations

import html
from typing import Any

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QGridLayout, QLabel, QScrollArea, QVBoxLayout, QWidget
from loguru import logger

from app.viewmodels.photo_vm import PhotoVM
from app.views.constants import (
    DEFAULT_THUMB_SIZE,
    GRID_MARGIN_RATIO,
    GRID_MIN_THUMB_PX,
    GRID_SPACING_PX,
)
from app.views.image_tasks import ImageTaskRunner

EMPTY_TEXT = "No photos match the current filters."


class _Tile(QWidget):
    """Thumbnail with title and date; double-click emits the photo id."""

    def __init__(self, photo: PhotoVM, side: int, on_activate, parent: QWidget | None = None):
        super().__init__(parent)
        self._photo_id = photo.id
        self._on_activate = on_activate
        v = QVBoxLayout(self)
        v.setContentsMargins(0, 0, 0, 0)
        self.image = QLabel("Loading…")
        self.image.setFixedSize(side, int(side * 3 / 4))
        self.image.setAlignment(Qt.AlignCenter)
        v.addWidget(self.image)
        info = QLabel(f"<b>{html.escape(photo.title)}</b><br>{photo.date_label}")
        info.setWordWrap(True)
        info.setMaximumWidth(side)
        v.addWidget(info)
        self.setToolTip(photo.description or photo.title)

    def mouseDoubleClickEvent(self, event) -> None:  # type: ignore[override]
        self._on_activate(self._photo_id)
        super().mouseDoubleClickEvent(event)


class GalleryGrid(QWidget):
    """Scrollable grid of the filtered photos."""

    photoActivated = Signal(str)  # photo id

    def __init__(
        self, parent: QWidget | None, task_runner: ImageTaskRunner, thumb_size: int | None = None
    ) -> None:
        super().__init__(parent)
        self._runner = task_runner
        self._thumb_size = int(thumb_size or DEFAULT_THUMB_SIZE)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.scroll_area.setVerticalScrollBarPolicy(Qt.ScrollBarAsNeeded)
        self.scroll_area.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        root.addWidget(self.scroll_area)

        # state
        self._items: list[PhotoVM] = []
        self._labels: dict[str, QLabel] = {}
        self._container: QWidget | None = None
        self._columns = 0

    # Public API
    def show_photos(self, photos: list[PhotoVM]) -> None:
        """Replace the grid content with `photos`, keeping their order."""
        self._items = list(photos)
        self._rebuild()

    def on_image_loaded(self, token: str, _path: str, image: Any) -> None:
        if not token.startswith("grid|"):
            return
        lbl = self._labels.get(token)
        if lbl is None:
            return
        if image is None:
            lbl.setText("(failed)")
            return
        pm = QPixmap.fromImage(image)
        if pm.isNull():
            lbl.setText("(failed)")
            return
        lbl.setPixmap(pm.scaled(lbl.width(), lbl.height(), Qt.KeepAspectRatio, Qt.SmoothTransformation))

    # Qt events
    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        cols, _ = self._compute_grid_geometry()
        if self._items and cols != self._columns:
            self._rebuild()

    # internals
    def _rebuild(self) -> None:
        old = self.scroll_area.takeWidget()
        if old is not None:
            old.deleteLater()
        self._labels = {}
        self._container = None

        if not self._items:
            empty = QLabel(EMPTY_TEXT)
            empty.setAlignment(Qt.AlignCenter)
            self.scroll_area.setWidget(empty)
            return

        container = QWidget()
        layout = QGridLayout(container)
        layout.setSpacing(GRID_SPACING_PX)
        layout.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        vp = self.scroll_area.viewport()
        m = int(max(1, vp.width()) * GRID_MARGIN_RATIO)
        layout.setContentsMargins(m, m, m, m)

        cols, side = self._compute_grid_geometry()
        self._columns = cols
        for i, photo in enumerate(self._items):
            r, c = divmod(i, cols)
            tile = _Tile(photo, side, self.photoActivated.emit)
            layout.addWidget(tile, r, c)
            token = self._runner.request_grid_thumbnail(photo.id, photo.path, side)
            self._labels[token] = tile.image

        self._container = container
        self.scroll_area.setWidget(container)
        logger.debug("Gallery grid rebuilt: {} photos in {} columns", len(self._items), cols)

    def _compute_grid_geometry(self) -> tuple[int, int]:
        width = max(1, self.scroll_area.viewport().width())
        spacing = GRID_SPACING_PX
        max_px = self._thumb_size if self._thumb_size > 0 else DEFAULT_THUMB_SIZE
        best_cols = 1
        best_cell = GRID_MIN_THUMB_PX
        for cols in range(1, 64):
            cell = (width - spacing * (cols + 1)) // cols
            if cell < GRID_MIN_THUMB_PX:
                break
            best_cols = cols
            best_cell = min(cell, max_px)
            if cell <= max_px:
                break
        return best_cols, best_cell
