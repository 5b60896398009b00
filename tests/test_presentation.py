from __future__ import annotations

import pytest

from core.presentation import (
    Effect,
    EffectKind,
    EmptyPresentationError,
    PresentationStatus,
    close_presentation,
    mark_audio_error,
    next_photo,
    open_presentation,
    prev_photo,
    status_of,
    toggle_mute,
    toggle_play,
)


def _kinds(effects: list[Effect]) -> list[EffectKind]:
    return [e.kind for e in effects]


def test_open_starts_paused_at_first_photo(slides) -> None:
    state, effects = open_presentation(slides(3))

    assert state is not None
    assert state.current_index == 0
    assert state.status is PresentationStatus.PAUSED
    assert not state.muted and not state.audio_error
    assert EffectKind.START_TIMER not in _kinds(effects)
    assert EffectKind.PLAY_AUDIO not in _kinds(effects)


def test_open_rejects_empty_sequence() -> None:
    with pytest.raises(EmptyPresentationError):
        open_presentation([])


def test_prev_from_first_wraps_to_last(slides) -> None:
    state, _ = open_presentation(slides(3))

    state, effects = prev_photo(state)

    assert state.current_index == 2
    assert effects == []


def test_next_from_last_wraps_to_first(slides) -> None:
    state, _ = open_presentation(slides(3))
    state, _ = prev_photo(state)

    state, effects = next_photo(state)

    assert state.current_index == 0
    assert effects == []


def test_single_photo_navigation_stays_put(slides) -> None:
    state, _ = open_presentation(slides(1))

    assert next_photo(state)[0].current_index == 0
    assert prev_photo(state)[0].current_index == 0


@pytest.mark.parametrize("n", [2, 3, 7])
def test_n_nexts_return_to_start_and_prev_inverts_next(slides, n: int) -> None:
    start, _ = open_presentation(slides(n))
    state = start
    for _ in range(n):
        state, _ = next_photo(state)
    assert state.current_index == start.current_index

    for i in range(n):
        moved, _ = next_photo(state)
        back, _ = prev_photo(moved)
        assert back.current_index == state.current_index
        state = moved
        assert state.current_index == (i + 1) % n


def test_toggle_play_emits_timer_and_audio_effects(slides) -> None:
    paused, _ = open_presentation(slides(2))

    playing, effects = toggle_play(paused)
    assert playing.status is PresentationStatus.PLAYING
    assert _kinds(effects) == [EffectKind.START_TIMER, EffectKind.PLAY_AUDIO]

    again, effects = toggle_play(playing)
    assert again == paused
    assert _kinds(effects) == [EffectKind.CANCEL_TIMER, EffectKind.PAUSE_AUDIO]


def test_toggle_mute_keeps_playing_state(slides) -> None:
    state, _ = open_presentation(slides(2))
    state, _ = toggle_play(state)

    muted, effects = toggle_mute(state)

    assert muted.muted
    assert muted.playing
    assert effects == [Effect(EffectKind.SET_MUTED, True)]
    unmuted, effects = toggle_mute(muted)
    assert not unmuted.muted and unmuted.playing
    assert effects == [Effect(EffectKind.SET_MUTED, False)]


def test_audio_error_does_not_stop_playing(slides) -> None:
    state, _ = open_presentation(slides(2))
    state, _ = toggle_play(state)

    failed, effects = mark_audio_error(state)

    assert failed.audio_error
    assert failed.playing
    assert effects == []
    assert mark_audio_error(failed) == (failed, [])


def test_close_releases_everything(slides) -> None:
    state, _ = open_presentation(slides(2))
    state, _ = toggle_play(state)

    closed, effects = close_presentation(state)

    assert closed is None
    assert status_of(closed) is PresentationStatus.CLOSED
    assert _kinds(effects) == [
        EffectKind.CANCEL_TIMER,
        EffectKind.PAUSE_AUDIO,
        EffectKind.RELEASE_AUDIO,
    ]


def test_close_when_closed_is_a_no_op() -> None:
    assert close_presentation(None) == (None, [])


def test_current_photo_follows_index(slides) -> None:
    photos = slides(3)
    state, _ = open_presentation(photos)
    state, _ = prev_photo(state)

    assert state.current_photo == photos[2]
    assert state.length == 3
