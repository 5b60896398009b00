"""Qt implementations of the slideshow timer and audio backend."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from PySide6.QtCore import QObject, QTimer, QUrl
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer
from loguru import logger

from core.services.interfaces import AudioUnavailableError, IAudioBackend, ITimer

_LOOP_INFINITE = -1  # QMediaPlayer.Loops.Infinite


def _to_url(source: str) -> QUrl:
    if source.lower().startswith(("file://", "http://", "https://", "qrc:")):
        return QUrl(source)
    return QUrl.fromLocalFile(source)


def _is_missing_local_file(source: str) -> bool:
    if source.lower().startswith(("http://", "https://", "qrc:")):
        return False
    url = _to_url(source)
    return not Path(url.toLocalFile()).exists()


class QtTimer(ITimer):
    """Repeating `QTimer` running on the GUI event loop."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._timer = QTimer(parent)
        self._timer.setSingleShot(False)
        self._timer.timeout.connect(self._on_timeout)
        self._callback: Callable[[], None] | None = None

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._timer.start(int(interval_ms))

    def stop(self) -> None:
        self._timer.stop()
        self._callback = None

    def is_active(self) -> bool:
        return self._timer.isActive()

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()


class QtAudioBackend(IAudioBackend):
    """Looping `QMediaPlayer` track.

    `QMediaPlayer.play()` returns immediately; decoding or device errors are
    reported later through `errorOccurred` and forwarded to the registered
    handler.
    """

    def __init__(self, source: str, parent: QObject | None = None) -> None:
        self._source = source
        self._handler: Callable[[str], None] | None = None
        self._missing = _is_missing_local_file(source)

        self._player: QMediaPlayer | None = QMediaPlayer(parent)
        self._output: QAudioOutput | None = QAudioOutput(parent)
        self._player.setAudioOutput(self._output)
        self._player.setLoops(_LOOP_INFINITE)
        self._player.errorOccurred.connect(self._on_error)

        if self._missing:
            logger.warning("Slideshow audio not found: {}", source)
        else:
            self._player.setSource(_to_url(source))

    def set_error_handler(self, handler: Callable[[str], None]) -> None:
        self._handler = handler

    def play(self) -> None:
        if self._player is None:
            raise AudioUnavailableError("audio backend already released")
        if self._missing:
            raise AudioUnavailableError(f"audio file not found: {self._source}")
        self._player.play()

    def pause(self) -> None:
        if self._player is not None:
            self._player.pause()

    def set_volume(self, volume: float) -> None:
        if self._output is not None:
            self._output.setVolume(float(volume))

    def release(self) -> None:
        player, output = self._player, self._output
        self._player = None
        self._output = None
        if player is not None:
            try:
                player.errorOccurred.disconnect(self._on_error)
            except (TypeError, RuntimeError):
                pass
            player.stop()
            player.setSource(QUrl())
            player.deleteLater()
        if output is not None:
            output.deleteLater()

    def _on_error(self, _error: QMediaPlayer.Error, message: str = "") -> None:
        if self._handler is not None:
            self._handler(message or f"media error while playing {self._source}")
