"""Core service interfaces shared by the slideshow and its resources.

The slideshow controller only talks to these interfaces, so the Qt-backed
implementations in `infrastructure.qt_media` can be swapped for fakes in
tests.
"""

from __future__ import annotations

from collections.abc import Callable


class AudioUnavailableError(RuntimeError):
    """Raised by an audio backend that cannot start playback."""


class ITimer:
    """Repeating timer driving the slideshow auto-advance."""

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        """Call `callback` every `interval_ms` until `stop()`.

        Starting an active timer restarts it with the new callback.
        """
        raise NotImplementedError

    def stop(self) -> None:
        """Cancel the timer. Safe to call when not active."""
        raise NotImplementedError

    def is_active(self) -> bool:
        """True while the timer is scheduled."""
        raise NotImplementedError


class IAudioBackend:
    """A single looping audio track.

    `play()` may complete asynchronously; failures detected later are
    reported through the callback registered with `set_error_handler`.
    """

    def set_error_handler(self, handler: Callable[[str], None]) -> None:
        """Register `handler(message)` for asynchronous playback failures."""
        raise NotImplementedError

    def play(self) -> None:
        """Request playback. May raise `AudioUnavailableError`."""
        raise NotImplementedError

    def pause(self) -> None:
        raise NotImplementedError

    def set_volume(self, volume: float) -> None:
        """Set volume in the range 0.0 to 1.0."""
        raise NotImplementedError

    def release(self) -> None:
        """Stop playback and free the underlying resource."""
        raise NotImplementedError
