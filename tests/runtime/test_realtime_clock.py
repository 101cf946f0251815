from __future__ import annotations

import time

from patterncanvas.runtime.frame_clock import RealTimeClock


def test_realtime_clock_t_is_relative_to_start_time(monkeypatch) -> None:
    now = 10.0

    def fake_perf_counter() -> float:
        return float(now)

    monkeypatch.setattr(time, "perf_counter", fake_perf_counter)

    clock = RealTimeClock()
    assert clock.start_time == 10.0
    assert clock.t() == 0.0

    now = 12.5
    assert clock.t() == 2.5
    assert clock.elapsed_ms() == 2500.0


def test_realtime_clock_accepts_explicit_start_time(monkeypatch) -> None:
    monkeypatch.setattr(time, "perf_counter", lambda: 5.0)
    clock = RealTimeClock(start_time=4.0)
    assert clock.t() == 1.0
