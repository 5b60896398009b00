"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any

from loguru import logger

DEFAULT_INTERVAL_MS: int = 3000
DEFAULT_AUDIO_FILE: str = "love-story.mp3"
DEFAULT_VOLUME: float = 0.5
DEFAULT_THUMB_SIZE: int = 320


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access.

    A missing settings file is not an error: every lookup then returns its
    default.
    """

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        self._data: dict[str, Any] = {}
        if not self._path.exists():
            logger.info("settings.json not found, using defaults: {}", self._path)
            return
        with self._path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"settings.json must contain an object: {self._path}")
        self._data = data

    @property
    def base_dir(self) -> Path:
        """Directory relative paths in the settings resolve against."""
        return self._path.parent

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def resolve_path(self, key: str, default: str | None = None) -> str | None:
        """Return the path at `key`, made absolute against `base_dir`."""
        raw = self.get(key, default)
        if not raw:
            return None
        p = Path(str(raw)).expanduser()
        if not p.is_absolute():
            p = self.base_dir / p
        return str(p)


@dataclass(frozen=True)
class SlideshowSettings:
    """Slideshow timing and audio options."""

    interval_ms: int = DEFAULT_INTERVAL_MS
    audio_path: str | None = None
    volume: float = DEFAULT_VOLUME

    @classmethod
    def from_settings(cls, settings: JsonSettings) -> SlideshowSettings:
        """Read `slideshow.*` keys, falling back to defaults on bad values."""
        try:
            interval = int(settings.get("slideshow.interval_ms", DEFAULT_INTERVAL_MS))
        except (TypeError, ValueError):
            logger.warning("Invalid slideshow.interval_ms, using {}", DEFAULT_INTERVAL_MS)
            interval = DEFAULT_INTERVAL_MS
        if interval <= 0:
            interval = DEFAULT_INTERVAL_MS

        try:
            volume = float(settings.get("slideshow.volume", DEFAULT_VOLUME))
        except (TypeError, ValueError):
            logger.warning("Invalid slideshow.volume, using {}", DEFAULT_VOLUME)
            volume = DEFAULT_VOLUME
        # muted is the only zero-volume level
        if not 0.0 < volume <= 1.0:
            volume = min(max(volume, 0.01), 1.0)

        audio_path = settings.resolve_path("slideshow.audio_path", DEFAULT_AUDIO_FILE)
        return cls(interval_ms=interval, audio_path=audio_path, volume=volume)


def thumbnail_size(settings: JsonSettings) -> int:
    """Return `gallery.thumbnail_size`, or the default when unset or invalid."""
    try:
        return int(settings.get("gallery.thumbnail_size", DEFAULT_THUMB_SIZE) or DEFAULT_THUMB_SIZE)
    except (TypeError, ValueError):
        return DEFAULT_THUMB_SIZE
