"""Background image loading for the grid and the slideshow.

Results come back on the receiver's `imageLoaded(token, path, image)` signal,
which Qt delivers on the GUI thread. Callers compare the token against the
one they are waiting for and drop stale results.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool
from loguru import logger


class ImageKind(str, Enum):
    GRID = "grid"
    SLIDE = "slide"


def make_token(kind: ImageKind, photo_id: str, side: int) -> str:
    """Token such as "grid|p1|320" identifying one request."""
    return f"{kind.value}|{photo_id}|{side}"


class _ImageTask(QRunnable):
    def __init__(
        self, *, kind: ImageKind, path: str, side: int, service: Any, receiver: QObject, token: str
    ) -> None:
        super().__init__()
        self._kind = kind
        self._path = path
        self._side = side
        self._service = service
        self._receiver = receiver
        self._token = token

    def _load(self) -> Any:
        if self._kind is ImageKind.SLIDE:
            return self._service.get_preview(self._path, self._side)
        return self._service.get_thumbnail(self._path, self._side)

    def run(self) -> None:  # type: ignore[override]
        # worker thread: a failure becomes a None image for the receiver
        try:
            image = self._load()
        except Exception as ex:  # pylint: disable=broad-except
            logger.error("Image load failed for {} ({}): {}", self._path, self._kind.value, ex)
            image = None
        try:
            self._receiver.imageLoaded.emit(self._token, self._path, image)  # type: ignore[attr-defined]
        except RuntimeError:
            logger.debug("Image receiver deleted, dropping {}", self._token)


class ImageTaskRunner:
    """Queues image loads on the global `QThreadPool`."""

    def __init__(self, *, service: Any, receiver: QObject) -> None:
        self._service = service
        self._receiver = receiver
        self._pool = QThreadPool.globalInstance()

    def request_slide(self, photo_id: str, path: str, side: int = 0) -> str:
        """Request a slideshow frame; `side` 0 means full resolution."""
        return self.request(ImageKind.SLIDE, photo_id, path, side)

    def request_grid_thumbnail(self, photo_id: str, path: str, thumb_side: int) -> str:
        return self.request(ImageKind.GRID, photo_id, path, thumb_side)

    def request(self, kind: ImageKind, photo_id: str, path: str, side: int) -> str:
        """Queue one load and return its token.

        Without an image service nothing is queued; the token is still
        returned so callers need no special case.
        """
        token = make_token(kind, photo_id, side)
        if self._service is not None:
            self._pool.start(
                _ImageTask(
                    kind=kind,
                    path=path,
                    side=side,
                    service=self._service,
                    receiver=self._receiver,
                    token=token,
                )
            )
        return token
