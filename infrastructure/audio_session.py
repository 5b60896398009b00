"""Background audio for an open slideshow.

`AudioSession` wraps one `IAudioBackend` for the lifetime of a single open
presentation. Playback failures never propagate: they set `audio_error`, are
logged, and are forwarded to the owner's `on_error` callback so the slideshow
keeps running without sound.
"""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from core.services.interfaces import AudioUnavailableError, IAudioBackend

DEFAULT_VOLUME: float = 0.5


class AudioSession:
    """Idempotent play/pause, two-level volume and exactly-once release."""

    def __init__(
        self,
        backend: IAudioBackend,
        *,
        volume: float = DEFAULT_VOLUME,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        """Create a session over `backend`.

        Args:
            backend: Looping audio resource, owned by this session from now on.
            volume: Unmuted volume (0.0-1.0].
            on_error: Called with a message the first time playback fails.
        """
        self._backend = backend
        self._volume = volume
        self._on_error = on_error
        self._playing = False
        self._muted = False
        self._released = False
        self.audio_error = False

        self._backend.set_error_handler(self._handle_error)
        self._backend.set_volume(volume)

    def __enter__(self) -> AudioSession:
        return self

    def __exit__(self, *_exc) -> None:
        self.release()

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def muted(self) -> bool:
        return self._muted

    @property
    def released(self) -> bool:
        return self._released

    def play(self) -> None:
        """Start playback unless already playing. Never raises."""
        if self._released or self._playing:
            return
        self._playing = True
        try:
            self._backend.play()
        except (AudioUnavailableError, OSError, RuntimeError) as ex:
            self._handle_error(str(ex) or ex.__class__.__name__)

    def pause(self) -> None:
        """Pause playback. Safe before the first `play()` and after release."""
        if self._released or not self._playing:
            return
        self._playing = False
        self._backend.pause()

    def set_muted(self, muted: bool) -> None:
        """Set volume to 0 when `muted`, else back to the session volume."""
        if self._released:
            return
        self._muted = muted
        self._backend.set_volume(0.0 if muted else self._volume)

    def release(self) -> None:
        """Stop playback and free the backend. Later calls do nothing."""
        if self._released:
            return
        self._released = True
        self._playing = False
        try:
            self._backend.release()
        except (OSError, RuntimeError) as ex:
            logger.warning("Audio backend release failed: {}", ex)
        logger.debug("Audio session released")

    def _handle_error(self, message: str) -> None:
        if self._released:
            return
        self._playing = False
        first = not self.audio_error
        self.audio_error = True
        logger.warning("Audio playback failed, continuing without sound: {}", message)
        if first and self._on_error is not None:
            self._on_error(message)
