"""Slideshow state and pure transition functions.

Each transition takes the current `PresentationState` and returns the new
state together with the list of effects the owner has to perform (start or
cancel the auto-advance timer, play/pause/release audio, change volume).
Nothing here touches a timer or an audio device, so every transition can be
exercised deterministically.

A `None` state means the presentation is closed.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from core.models import DisplayPhoto


class EmptyPresentationError(ValueError):
    """Raised when a presentation is opened with no photos."""


class PresentationStatus(Enum):
    CLOSED = "closed"
    PAUSED = "paused"
    PLAYING = "playing"


class EffectKind(Enum):
    START_TIMER = "start_timer"
    CANCEL_TIMER = "cancel_timer"
    PLAY_AUDIO = "play_audio"
    PAUSE_AUDIO = "pause_audio"
    SET_MUTED = "set_muted"
    RELEASE_AUDIO = "release_audio"


@dataclass(frozen=True)
class Effect:
    """Side effect requested by a transition.

    Attributes:
        kind: What to do.
        value: Payload, only used by `SET_MUTED` (the new muted flag).
    """

    kind: EffectKind
    value: Any = None


@dataclass(frozen=True)
class PresentationState:
    """State of an open slideshow.

    Attributes:
        photos: Non-empty sequence being presented.
        current_index: Index into `photos`, always in range.
        playing: True while auto-advance and audio are running.
        muted: True when audio volume is zero.
        audio_error: True once audio playback has failed in this session.
    """

    photos: tuple[DisplayPhoto, ...]
    current_index: int = 0
    playing: bool = False
    muted: bool = False
    audio_error: bool = False

    @property
    def length(self) -> int:
        return len(self.photos)

    @property
    def current_photo(self) -> DisplayPhoto:
        return self.photos[self.current_index]

    @property
    def status(self) -> PresentationStatus:
        return PresentationStatus.PLAYING if self.playing else PresentationStatus.PAUSED


Transition = tuple[PresentationState | None, list[Effect]]


def status_of(state: PresentationState | None) -> PresentationStatus:
    """Return the status for `state`, `CLOSED` when there is none."""
    return PresentationStatus.CLOSED if state is None else state.status


def open_presentation(photos: Sequence[DisplayPhoto], *, muted: bool = False) -> Transition:
    """Open a paused presentation at the first photo.

    Neither the timer nor audio is started. The volume effect is emitted so a
    freshly acquired audio resource starts at the right level.

    Raises:
        EmptyPresentationError: `photos` is empty.
    """
    if not photos:
        raise EmptyPresentationError("cannot open a presentation without photos")
    state = PresentationState(photos=tuple(photos), muted=muted)
    return state, [Effect(EffectKind.SET_MUTED, muted)]


def toggle_play(state: PresentationState) -> Transition:
    """Switch between paused and playing."""
    if state.playing:
        return replace(state, playing=False), [
            Effect(EffectKind.CANCEL_TIMER),
            Effect(EffectKind.PAUSE_AUDIO),
        ]
    return replace(state, playing=True), [
        Effect(EffectKind.START_TIMER),
        Effect(EffectKind.PLAY_AUDIO),
    ]


def next_photo(state: PresentationState) -> Transition:
    """Advance one photo, wrapping to the first. The timer is left alone."""
    return replace(state, current_index=(state.current_index + 1) % state.length), []


def prev_photo(state: PresentationState) -> Transition:
    """Go back one photo, wrapping to the last. The timer is left alone."""
    index = (state.current_index - 1 + state.length) % state.length
    return replace(state, current_index=index), []


def toggle_mute(state: PresentationState) -> Transition:
    muted = not state.muted
    return replace(state, muted=muted), [Effect(EffectKind.SET_MUTED, muted)]


def mark_audio_error(state: PresentationState) -> Transition:
    """Record an audio failure. Playback state is unaffected."""
    if state.audio_error:
        return state, []
    return replace(state, audio_error=True), []


def close_presentation(state: PresentationState | None) -> Transition:
    """Close the presentation, cancelling the timer and releasing audio.

    Closing an already closed presentation yields no effects.
    """
    if state is None:
        return None, []
    return None, [
        Effect(EffectKind.CANCEL_TIMER),
        Effect(EffectKind.PAUSE_AUDIO),
        Effect(EffectKind.RELEASE_AUDIO),
    ]
