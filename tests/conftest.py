from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from core.models import DisplayPhoto, Photo
from core.services.interfaces import AudioUnavailableError, IAudioBackend, ITimer

UTC = timezone.utc


class FakeTimer(ITimer):
    """Records start/stop calls; `fire()` simulates one tick."""

    def __init__(self) -> None:
        self.interval_ms: int | None = None
        self.callback = None
        self.starts = 0
        self.stops = 0

    def start(self, interval_ms, callback) -> None:
        self.interval_ms = interval_ms
        self.callback = callback
        self.starts += 1

    def stop(self) -> None:
        self.callback = None
        self.stops += 1

    def is_active(self) -> bool:
        return self.callback is not None

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            assert self.callback is not None, "timer is not active"
            self.callback()


class FakeAudioBackend(IAudioBackend):
    """In-memory audio backend.

    `fail_on_play` makes `play()` raise; `emit_error()` simulates a failure
    reported asynchronously after `play()` returned.
    """

    def __init__(self, fail_on_play: bool = False) -> None:
        self.fail_on_play = fail_on_play
        self.handler = None
        self.playing = False
        self.volume: float | None = None
        self.play_calls = 0
        self.pause_calls = 0
        self.release_calls = 0

    def set_error_handler(self, handler) -> None:
        self.handler = handler

    def play(self) -> None:
        self.play_calls += 1
        if self.fail_on_play:
            raise AudioUnavailableError("playback blocked")
        self.playing = True

    def pause(self) -> None:
        self.pause_calls += 1
        self.playing = False

    def set_volume(self, volume: float) -> None:
        self.volume = volume

    def release(self) -> None:
        self.release_calls += 1
        self.playing = False

    def emit_error(self, message: str = "decoder error") -> None:
        self.playing = False
        assert self.handler is not None
        self.handler(message)


@pytest.fixture()
def fake_timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture()
def make_backend():
    """Factory creating fake backends; every created backend is kept in `.created`."""

    created: list[FakeAudioBackend] = []

    def factory(fail_on_play: bool = False) -> FakeAudioBackend:
        backend = FakeAudioBackend(fail_on_play=fail_on_play)
        created.append(backend)
        return backend

    factory.created = created  # type: ignore[attr-defined]
    return factory


@pytest.fixture()
def make_photo():
    base = datetime(2024, 3, 5, 12, 0, tzinfo=UTC)
    counter = {"n": 0}

    def factory(
        title: str = "",
        tags: tuple[str, ...] = (),
        categories: tuple[str, ...] = (),
        photo_id: str | None = None,
        description: str | None = None,
    ) -> Photo:
        counter["n"] += 1
        n = counter["n"]
        return Photo(
            id=photo_id or f"p{n}",
            title=title or f"Photo {n}",
            path=f"/photos/{n}.jpg",
            created_at=base + timedelta(days=n),
            description=description,
            tag_ids=frozenset(tags),
            category_ids=frozenset(categories),
        )

    return factory


@pytest.fixture()
def slides():
    def factory(n: int) -> list[DisplayPhoto]:
        return [DisplayPhoto(id=f"s{i}", path=f"/photos/s{i}.jpg", title=f"Slide {i}") for i in range(n)]

    return factory
