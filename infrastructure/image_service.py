"""Image loading, thumbnailing, and caching utilities.

Decodes with Qt's `QImageReader` first and falls back to Pillow for formats
the Qt image plugins do not cover. Results are kept in a bounded in-memory
LRU cache keyed by path, modification time and requested size.
"""

from __future__ import annotations

from collections import OrderedDict
import hashlib
import os
from threading import Lock
from typing import Any

from PIL import Image, ImageOps
from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QColor, QImage, QImageReader
from loguru import logger

DEFAULT_MEM_CACHE: int = 256
PLACEHOLDER_COLOR = QColor(220, 220, 220)


def _compute_cache_key(path: str, size_key: int) -> str:
    """Compute a stable cache key from path, mtime, size, and requested side."""
    try:
        st = os.stat(path)
        sig = f"{path}|{int(st.st_mtime_ns)}|{int(st.st_size)}|{int(size_key)}"
    except OSError:
        sig = f"{path}|0|0|{int(size_key)}"
    return hashlib.sha1(sig.encode("utf-8", errors="ignore")).hexdigest()


def _scaled_size(width: int, height: int, side: int) -> QSize:
    if width >= height:
        nw = min(side, width)
        nh = int(height * (nw / max(1, width)))
    else:
        nh = min(side, height)
        nw = int(width * (nh / max(1, height)))
    return QSize(max(1, nw), max(1, nh))


class _LRUCache:
    """Thread-safe LRU of decoded images; loads run in worker threads."""

    def __init__(self, capacity: int) -> None:
        self._cap = max(1, int(capacity or 1))
        self._data: OrderedDict[str, QImage] = OrderedDict()
        self._lock = Lock()

    def get(self, key: str) -> QImage | None:
        """Return cached QImage for key, moving it to the MRU position."""
        with self._lock:
            image = self._data.get(key)
            if image is not None:
                self._data.move_to_end(key)
            return image

    def put(self, key: str, image: QImage) -> None:
        """Insert or update `key` with `image`, evicting LRU when over capacity."""
        with self._lock:
            self._data[key] = image
            self._data.move_to_end(key)
            while len(self._data) > self._cap:
                self._data.popitem(last=False)


class ImageService:
    """Image loader for grid thumbnails and slideshow frames."""

    def __init__(self, settings: Any | None = None) -> None:
        """Initialize the memory cache, sized from `gallery.image_cache_size`."""
        capacity = DEFAULT_MEM_CACHE
        if settings is not None:
            try:
                capacity = int(settings.get("gallery.image_cache_size", capacity) or capacity)
            except (TypeError, ValueError):
                capacity = DEFAULT_MEM_CACHE
        self._mem_cache = _LRUCache(capacity)

    # Public API
    def get_thumbnail(self, path: str, size: int) -> QImage:
        """Return thumbnail image for `path` with max side `size`."""
        return self._get_image(path, size)

    def get_preview(self, path: str, max_side: int) -> QImage:
        """Return image for `path` bounded by `max_side` (0 keeps full size)."""
        return self._get_image(path, max_side)

    # Internal helpers
    def _get_image(self, path: str, requested_side: int) -> QImage:
        key = _compute_cache_key(path, requested_side)
        img = self._mem_cache.get(key)
        if img is not None:
            return img

        img = self._load_via_qt(path, requested_side)
        if img is None:
            img = self._load_via_pillow(path, requested_side)
        if img is None:
            logger.warning("Could not decode image: {}", path)
            # Placeholder keeps the grid layout stable
            img = QImage(64, 64, QImage.Format_ARGB32)
            img.fill(PLACEHOLDER_COLOR)
        self._mem_cache.put(key, img)
        return img

    def _load_via_qt(self, path: str, requested_side: int) -> QImage | None:
        reader = QImageReader(path)
        reader.setAutoTransform(True)
        if requested_side > 0 and reader.size().isValid():
            orig = reader.size()
            if orig.width() > 0 and orig.height() > 0:
                reader.setScaledSize(_scaled_size(orig.width(), orig.height(), requested_side))
        img = reader.read()
        if img.isNull():
            logger.debug("QImageReader failed for {}: {}", path, reader.errorString())
            return None
        if requested_side > 0 and max(img.width(), img.height()) > requested_side:
            img = img.scaled(
                requested_side, requested_side, Qt.KeepAspectRatio, Qt.SmoothTransformation
            )
        return img

    def _load_via_pillow(self, path: str, requested_side: int) -> QImage | None:
        try:
            with Image.open(path) as im:
                im = ImageOps.exif_transpose(im)
                if requested_side > 0:
                    im.thumbnail((requested_side, requested_side), Image.Resampling.LANCZOS)
                return self._pil_to_qimage(im)
        except (OSError, ValueError) as ex:
            logger.debug("Pillow load failed for {}: {}", path, ex)
            return None

    def _pil_to_qimage(self, pil_img: Any) -> QImage | None:
        """Convert a Pillow image to `QImage` and detach from the source buffer."""
        if pil_img.mode != "RGBA":
            pil_img = pil_img.convert("RGBA")
        data = pil_img.tobytes("raw", "RGBA")
        qimg = QImage(data, pil_img.width, pil_img.height, pil_img.width * 4, QImage.Format_RGBA8888)
        if qimg.isNull():
            return None
        return qimg.copy()
