"""tick ホスト（手動キュー / pyglet clock）に関するテスト群。"""

from __future__ import annotations

import pyglet

from patterncanvas.runtime.ticker import ManualTicker, PygletTicker


def test_manual_ticker_runs_callbacks_queued_before_step() -> None:
    ticker = ManualTicker()
    calls: list[str] = []

    def first() -> None:
        calls.append("first")
        ticker.request_tick(lambda: calls.append("second"))

    ticker.request_tick(first)
    assert ticker.step() == 1
    assert calls == ["first"]
    assert ticker.pending == 1

    assert ticker.step() == 1
    assert calls == ["first", "second"]
    assert ticker.frame_index == 2


def test_manual_ticker_cancel_modes() -> None:
    calls: list[int] = []

    dropping = ManualTicker()
    handle = dropping.request_tick(lambda: calls.append(1))
    dropping.cancel(handle)
    assert dropping.pending == 0

    keeping = ManualTicker(drop_cancelled=False)
    handle = keeping.request_tick(lambda: calls.append(2))
    keeping.cancel(handle)
    assert keeping.pending == 1
    keeping.step()
    assert calls == [2]


def test_manual_ticker_run_until_idle_respects_max_frames() -> None:
    ticker = ManualTicker()

    def again() -> None:
        ticker.request_tick(again)

    ticker.request_tick(again)
    assert ticker.run_until_idle(max_frames=5) == 5
    assert ticker.pending == 1


class _FakeTime:
    def __init__(self, start: float = 100.0, step: float = 0.0) -> None:
        self.now = float(start)
        self.step = float(step)

    def __call__(self) -> float:
        self.now += self.step
        return self.now


def test_pyglet_ticker_fires_once_after_interval() -> None:
    fake = _FakeTime()
    clock = pyglet.clock.Clock(time_function=fake)
    ticker = PygletTicker(fps=60, clock=clock)
    calls: list[int] = []

    ticker.request_tick(lambda: calls.append(1))
    assert ticker.pending == 1

    fake.now += 1.0
    clock.tick()
    assert calls == [1]
    assert ticker.pending == 0

    fake.now += 1.0
    clock.tick()
    assert calls == [1]


def test_pyglet_ticker_cancel_unschedules() -> None:
    fake = _FakeTime()
    clock = pyglet.clock.Clock(time_function=fake)
    ticker = PygletTicker(fps=60, clock=clock)
    calls: list[int] = []

    handle = ticker.request_tick(lambda: calls.append(1))
    ticker.cancel(handle)
    assert ticker.pending == 0

    fake.now += 1.0
    clock.tick()
    assert calls == []


def test_pyglet_ticker_run_until() -> None:
    clock = pyglet.clock.Clock(time_function=_FakeTime(step=0.01))
    ticker = PygletTicker(fps=60, clock=clock)
    calls: list[int] = []

    def tick() -> None:
        calls.append(1)
        if len(calls) < 3:
            ticker.request_tick(tick)

    ticker.request_tick(tick)
    assert ticker.run_until(lambda: len(calls) >= 3) is True

    ticker.request_tick(tick)
    assert ticker.run_until(lambda: len(calls) >= 4, timeout=5.0) is True
    assert ticker.run_until(lambda: False) is False
