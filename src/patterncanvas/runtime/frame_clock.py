# どこで: `src/patterncanvas/runtime/frame_clock.py`。
# 何を: 描画パスの経過時間を測る実時間クロックを提供する。
# なぜ: パス完了時の所要時間ログを、描画ロジックから切り離して計測するため。

from __future__ import annotations

import time


class RealTimeClock:
    """実時間ベースのクロック。

    Notes
    -----
    `t` は `perf_counter()` の差分（秒）。
    """

    def __init__(self, *, start_time: float | None = None) -> None:
        self._start_time = float(time.perf_counter() if start_time is None else start_time)

    @property
    def start_time(self) -> float:
        """開始時刻（`perf_counter()` 基準の秒）を返す。"""

        return float(self._start_time)

    def t(self) -> float:
        """開始からの経過秒を返す。"""

        return float(time.perf_counter() - self._start_time)

    def elapsed_ms(self) -> float:
        """開始からの経過ミリ秒を返す。"""

        return self.t() * 1000.0
