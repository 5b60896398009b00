"""Slideshow controller: owns the state, the auto-advance timer and audio.

The controller is the only place that performs the effects produced by the
pure transitions in `core.presentation`. It exposes the complete control
surface for the slideshow window; the window renders from the state passed to
subscribed listeners and never keeps state of its own.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager

from loguru import logger

from core.models import DisplayPhoto
from core.presentation import (
    Effect,
    EffectKind,
    PresentationState,
    PresentationStatus,
    Transition,
    close_presentation,
    mark_audio_error,
    next_photo,
    open_presentation,
    prev_photo,
    status_of,
    toggle_mute,
    toggle_play,
)
from core.services.interfaces import ITimer
from infrastructure.audio_session import AudioSession
from infrastructure.settings import DEFAULT_INTERVAL_MS

# Builds a fresh session for each opened presentation; receives the error callback.
AudioFactory = Callable[[Callable[[str], None]], AudioSession]
StateListener = Callable[[PresentationState | None], None]


class PresentationController:
    """State machine `Closed` -> `Open.Paused` <-> `Open.Playing` -> `Closed`.

    Manual `next()`/`prev()` do not restart the auto-advance timer, so the
    first automatic advance after a manual one can come sooner than a full
    interval. This matches the behaviour the gallery has always had.
    """

    def __init__(
        self,
        timer: ITimer,
        audio_factory: AudioFactory,
        *,
        interval_ms: int = DEFAULT_INTERVAL_MS,
    ) -> None:
        """Create a closed controller.

        Args:
            timer: Repeating timer owned exclusively by this controller.
            audio_factory: Creates the `AudioSession` for each open.
            interval_ms: Auto-advance period while playing.
        """
        self._timer = timer
        self._audio_factory = audio_factory
        self._interval_ms = int(interval_ms)
        self._state: PresentationState | None = None
        self._audio: AudioSession | None = None
        self._listeners: list[StateListener] = []

    # Read access

    @property
    def state(self) -> PresentationState | None:
        return self._state

    @property
    def status(self) -> PresentationStatus:
        return status_of(self._state)

    @property
    def is_open(self) -> bool:
        return self._state is not None

    @property
    def current_index(self) -> int | None:
        return None if self._state is None else self._state.current_index

    @property
    def current_photo(self) -> DisplayPhoto | None:
        return None if self._state is None else self._state.current_photo

    @property
    def length(self) -> int:
        return 0 if self._state is None else self._state.length

    @property
    def playing(self) -> bool:
        return self._state is not None and self._state.playing

    @property
    def muted(self) -> bool:
        return self._state is not None and self._state.muted

    @property
    def audio_error(self) -> bool:
        return self._state is not None and self._state.audio_error

    @property
    def position_label(self) -> str:
        """Counter text such as ``"3 / 10"``; empty when closed."""
        if self._state is None:
            return ""
        return f"{self._state.current_index + 1} / {self._state.length}"

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call `listener(state)` after every transition. Returns an unsubscribe."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # Control surface

    def open(self, photos: Sequence[DisplayPhoto]) -> bool:
        """Open a paused slideshow on `photos`.

        Returns:
            False, without opening anything, when `photos` is empty.
        """
        if not photos:
            logger.warning("Slideshow not opened: no photos to present")
            return False
        if self._state is not None:
            logger.info("Closing the running slideshow before opening a new one")
            self.close()

        try:
            self._audio = self._audio_factory(self._on_audio_error)
        except (OSError, RuntimeError) as ex:
            logger.warning("Slideshow audio unavailable: {}", ex)
            self._audio = None

        self._apply(open_presentation(photos), "open")
        logger.info("Slideshow opened with {} photos", len(photos))
        if self._audio is None and self._state is not None:
            self._apply(mark_audio_error(self._state), "audio_error")
        return True

    def close(self) -> None:
        """Stop the timer, release audio and discard the state. Idempotent."""
        if self._state is None:
            return
        self._apply(close_presentation(self._state), "close")
        logger.info("Slideshow closed")

    def toggle_play(self) -> None:
        if self._state is not None:
            self._apply(toggle_play(self._state), "toggle_play")

    def next(self) -> None:
        if self._state is not None:
            self._apply(next_photo(self._state), "next")

    def prev(self) -> None:
        if self._state is not None:
            self._apply(prev_photo(self._state), "prev")

    def toggle_mute(self) -> None:
        if self._state is not None:
            self._apply(toggle_mute(self._state), "toggle_mute")

    @contextmanager
    def session(self, photos: Sequence[DisplayPhoto]) -> Iterator[bool]:
        """Open for the duration of a `with` block; always closed on exit."""
        opened = self.open(photos)
        try:
            yield opened
        finally:
            self.close()

    # Internals

    def _on_tick(self) -> None:
        # A tick queued before cancellation may still be delivered.
        if self._state is None or not self._state.playing:
            return
        self._apply(next_photo(self._state), "tick")

    def _on_audio_error(self, _message: str) -> None:
        if self._state is not None:
            self._apply(mark_audio_error(self._state), "audio_error")

    def _apply(self, transition: Transition, action: str) -> None:
        state, effects = transition
        self._state = state
        for effect in effects:
            self._perform(effect)
        # an effect may have applied a nested transition (audio failure)
        state = self._state
        logger.debug(
            "Slideshow {} -> {} index={} effects={}",
            action,
            status_of(state).value,
            None if state is None else state.current_index,
            [e.kind.value for e in effects],
        )
        for listener in list(self._listeners):
            listener(state)

    def _perform(self, effect: Effect) -> None:
        kind = effect.kind
        if kind is EffectKind.START_TIMER:
            self._timer.start(self._interval_ms, self._on_tick)
        elif kind is EffectKind.CANCEL_TIMER:
            self._timer.stop()
        elif self._audio is None:
            return
        elif kind is EffectKind.PLAY_AUDIO:
            self._audio.play()
        elif kind is EffectKind.PAUSE_AUDIO:
            self._audio.pause()
        elif kind is EffectKind.SET_MUTED:
            self._audio.set_muted(bool(effect.value))
        elif kind is EffectKind.RELEASE_AUDIO:
            audio, self._audio = self._audio, None
            audio.release()
