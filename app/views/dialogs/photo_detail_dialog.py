from __future__ import annotations

import html
from typing import Any

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QDialog, QHBoxLayout, QLabel, QPushButton, QVBoxLayout

from app.viewmodels.photo_vm import PhotoVM
from app.views.image_tasks import ImageTaskRunner

DETAIL_IMAGE_SIDE = 1024


class PhotoDetailDialog(QDialog):
    """Large image with title, date, description, categories and tags."""

    imageLoaded = Signal(str, str, object)  # token, path, QImage

    def __init__(
        self,
        photo: PhotoVM,
        tag_names: list[str],
        category_names: list[str],
        image_service: Any | None,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(photo.title)
        self._runner = ImageTaskRunner(service=image_service, receiver=self)

        root = QVBoxLayout(self)

        self.image = QLabel("Loading…")
        self.image.setAlignment(Qt.AlignCenter)
        self.image.setMinimumSize(480, 320)
        root.addWidget(self.image, 1)

        root.addWidget(QLabel(f"<h2>{html.escape(photo.title)}</h2>"))
        root.addWidget(QLabel(photo.date_label))

        if photo.description:
            desc = QLabel(photo.description)
            desc.setWordWrap(True)
            root.addWidget(desc)

        if category_names:
            root.addWidget(QLabel("<b>Categories</b>: " + html.escape(", ".join(category_names))))
        if tag_names:
            root.addWidget(QLabel("<b>Tags</b>: " + html.escape(", ".join(tag_names))))

        btns = QHBoxLayout()
        btns.addStretch(1)
        self.btn_close = QPushButton("Back to gallery")
        btns.addWidget(self.btn_close)
        root.addLayout(btns)
        self.btn_close.clicked.connect(self.accept)

        self.imageLoaded.connect(self._on_image_loaded)
        self._token = self._runner.request_slide(photo.id, photo.path, DETAIL_IMAGE_SIDE)

    def _on_image_loaded(self, token: str, _path: str, image: Any) -> None:
        if token != self._token:
            return
        pm = QPixmap.fromImage(image) if image is not None else QPixmap()
        if pm.isNull():
            self.image.setText("(failed)")
            return
        self.image.setPixmap(
            pm.scaled(self.image.size(), Qt.KeepAspectRatio, Qt.SmoothTransformation)
        )
