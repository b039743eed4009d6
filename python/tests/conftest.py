"""Shared fixtures: a manual clock for delayed stage transitions."""

from __future__ import annotations

from collections.abc import Callable

import pytest


class _Timer:
    def __init__(self, due: float, callback: Callable[[], object]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """``call_later`` that only fires when the test advances the clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[_Timer] = []

    def call_later(self, delay: float, callback: Callable[[], object]) -> _Timer:
        timer = _Timer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted(
            (t for t in self.timers if t.due <= self.now and not t.cancelled),
            key=lambda t: t.due,
        )
        self.timers = [t for t in self.timers if t not in due and not t.cancelled]
        for timer in due:
            timer.callback()

    @property
    def pending(self) -> list[_Timer]:
        return [t for t in self.timers if not t.cancelled]


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()
