# どこで: `src/patterncanvas/runtime/ticker.py`。
# 何を: 「次のフレームでこの関数を 1 回呼ぶ」tick プリミティブ（手動キュー版 / pyglet clock 版）を提供する。
# なぜ: スケジューラを特定のイベントループから切り離し、テストでは決定的に 1 フレームずつ進めるため。

from __future__ import annotations

import time
from collections import deque
from typing import Any, Callable, Protocol

import pyglet

TickCallback = Callable[[], None]


class Ticker(Protocol):
    """次フレームのコールバックを 1 回だけ予約できるホスト。"""

    def request_tick(self, callback: TickCallback) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class ManualTicker:
    """呼び出し側が `step()` で 1 フレームずつ進める tick ホスト。

    Parameters
    ----------
    drop_cancelled : bool, optional
        True の場合、`cancel()` された予約はキューから取り除く。
        False の場合は取り除かず、発火時にコールバック側の取消判定に任せる
        （すでにホストへ積まれてしまった予約を再現する）。
    """

    def __init__(self, *, drop_cancelled: bool = True) -> None:
        self._queue: deque[tuple[int, TickCallback]] = deque()
        self._next_handle = 0
        self._drop_cancelled = bool(drop_cancelled)
        self._frame_index = 0

    @property
    def frame_index(self) -> int:
        """実行済みフレーム数を返す。"""

        return int(self._frame_index)

    @property
    def pending(self) -> int:
        """未実行の予約数を返す。"""

        return len(self._queue)

    def request_tick(self, callback: TickCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._queue.append((handle, callback))
        return handle

    def cancel(self, handle: Any) -> None:
        if not self._drop_cancelled:
            return
        self._queue = deque(item for item in self._queue if item[0] != handle)

    def step(self) -> int:
        """1 フレーム進め、このフレーム開始時点までに予約されたコールバックを実行する。

        Returns
        -------
        int
            実行したコールバック数。
        """

        batch = len(self._queue)
        for _ in range(batch):
            if not self._queue:
                break
            _, callback = self._queue.popleft()
            callback()
        self._frame_index += 1
        return batch

    def run_until_idle(self, *, max_frames: int | None = None) -> int:
        """予約が無くなるまでフレームを進め、進めたフレーム数を返す。"""

        frames = 0
        while self._queue:
            if max_frames is not None and frames >= int(max_frames):
                break
            self.step()
            frames += 1
        return frames


class PygletTicker:
    """pyglet の clock で `1/fps` 秒後に 1 回だけコールバックを呼ぶ tick ホスト。

    Notes
    -----
    `clock` を省略すると pyglet の既定 clock（`pyglet.app.run()` が回すもの）を使う。
    ウィンドウを持たない実行では `run_until()` で clock を自前で回す。
    """

    def __init__(self, *, fps: float = 60.0, clock: Any | None = None) -> None:
        _fps = float(fps)
        self._interval = 1.0 / _fps if _fps > 0 else 0.0
        self._clock = clock if clock is not None else pyglet.clock.get_default()
        self._pending: set[Callable[[float], None]] = set()

    @property
    def clock(self) -> Any:
        """使用中の pyglet clock を返す。"""

        return self._clock

    @property
    def pending(self) -> int:
        """未発火の予約数を返す。"""

        return len(self._pending)

    def request_tick(self, callback: TickCallback) -> Callable[[float], None]:
        def fire(dt: float) -> None:
            self._pending.discard(fire)
            callback()

        self._pending.add(fire)
        self._clock.schedule_once(fire, self._interval)
        return fire

    def cancel(self, handle: Any) -> None:
        self._pending.discard(handle)
        self._clock.unschedule(handle)

    def run_until(self, done: Callable[[], bool], *, timeout: float | None = None) -> bool:
        """`done()` が真になるか予約が尽きるまで clock を回す。

        Returns
        -------
        bool
            `done()` が真になって終了した場合 True。予約切れ/timeout の場合 False。
        """

        deadline = None if timeout is None else time.perf_counter() + float(timeout)
        while not done():
            if not self._pending:
                return False
            if deadline is not None and time.perf_counter() >= deadline:
                return False
            self._clock.tick()
            sleep_time = self._clock.get_sleep_time(True)
            if sleep_time:
                time.sleep(min(float(sleep_time), self._interval))
        return True


__all__ = ["ManualTicker", "PygletTicker", "TickCallback", "Ticker"]
