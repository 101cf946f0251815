# どこで: `src/patterncanvas/runtime/scheduler.py`。
# 何を: 要素列を複数 tick に分けてサーフェスへ描き、進捗を通知するインクリメンタルスケジューラを提供する。
# なぜ: 1 tick あたりの描画量を抑えてホストへ制御を返しつつ、入力変更時に古いパスを安全に打ち切るため。

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from patterncanvas.core.color import parse_color
from patterncanvas.core.element import ElementPosition
from patterncanvas.core.runtime_config import RuntimeConfig, runtime_config
from patterncanvas.core.settings import SHAPES
from patterncanvas.render.primitives import draw_element
from patterncanvas.render.surface import Surface
from patterncanvas.runtime.frame_clock import RealTimeClock
from patterncanvas.runtime.ticker import Ticker

_logger = logging.getLogger(__name__)

DrawFunc = Callable[[Surface, ElementPosition, str, str], None]
ProgressCallback = Callable[[int], None]
CompleteCallback = Callable[["RenderPass"], None]


class PassState(Enum):
    """描画パスの状態。RUNNING だけが tick を予約している。"""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def compute_batch_size(
    n: int,
    *,
    target_duration_ms: float = 2500.0,
    target_fps: float = 60.0,
    large_count_threshold: int = 1000,
) -> int:
    """1 tick で描く要素数を返す。

    Notes
    -----
    ``total_ticks = target_duration_ms / (1000 / target_fps)``、
    ``base = max(1, ceil(n / total_ticks))``。
    n が large_count_threshold を超える場合は ``ceil(n / large_count_threshold)`` 倍する
    （所要時間の保証ではなく、大量要素での超過を抑える粗い補正）。
    """

    if float(target_duration_ms) <= 0:
        raise ValueError("target_duration_ms は正の値である必要がある")
    if float(target_fps) <= 0:
        raise ValueError("target_fps は正の値である必要がある")
    if int(large_count_threshold) <= 0:
        raise ValueError("large_count_threshold は正の値である必要がある")

    n_i = max(0, int(n))
    total_ticks = float(target_duration_ms) * float(target_fps) / 1000.0
    batch = max(1, math.ceil(n_i / total_ticks))
    if n_i > int(large_count_threshold):
        batch *= math.ceil(n_i / int(large_count_threshold))
    return int(batch)


def progress_percent(cursor: int, total: int) -> int:
    """cursor/total を 0..100 の整数（四捨五入）で返す。total=0 は 100。"""

    if total <= 0:
        return 100
    return int(math.floor(int(cursor) * 100.0 / int(total) + 0.5))


@dataclass(eq=False)
class RenderPass:
    """1 回分の描画パスの状態。スケジューラだけが更新する。"""

    elements: tuple[ElementPosition, ...]
    shape: str
    color: str
    batch_size: int
    clock: RealTimeClock
    on_progress: ProgressCallback | None = None
    on_complete: CompleteCallback | None = None
    cursor: int = 0
    progress: int = 0
    ticks: int = 0
    drawn: int = 0
    cancelled: bool = False
    state: PassState = PassState.RUNNING
    _handle: Any = field(default=None, repr=False)

    @property
    def total(self) -> int:
        """要素数を返す。"""

        return len(self.elements)

    @property
    def start_time(self) -> float:
        """開始時刻（`perf_counter()` 基準の秒）を返す。"""

        return self.clock.start_time

    @property
    def done(self) -> bool:
        """完了または取消済みかどうかを返す。"""

        return self.state in (PassState.COMPLETED, PassState.CANCELLED)


class IncrementalScheduler:
    """要素列を tick ごとに batch_size 個ずつ描くスケジューラ。

    Notes
    -----
    同時に RUNNING なパスは高々 1 つ。`start()` を再度呼ぶと実行中のパスを取り消す。
    取消は協調的で、予約済みの tick が発火しても取消フラグを見て何も描かずに戻る。
    """

    def __init__(
        self,
        surface: Surface,
        ticker: Ticker,
        *,
        target_duration_ms: float = 2500.0,
        target_fps: float = 60.0,
        large_count_threshold: int = 1000,
        draw: DrawFunc = draw_element,
    ) -> None:
        # 引数の妥当性をここで確定させる。
        compute_batch_size(
            0,
            target_duration_ms=target_duration_ms,
            target_fps=target_fps,
            large_count_threshold=large_count_threshold,
        )
        self._surface = surface
        self._ticker = ticker
        self._target_duration_ms = float(target_duration_ms)
        self._target_fps = float(target_fps)
        self._large_count_threshold = int(large_count_threshold)
        self._draw = draw
        self._active: RenderPass | None = None

    @classmethod
    def from_config(
        cls,
        surface: Surface,
        ticker: Ticker,
        *,
        config: RuntimeConfig | None = None,
        draw: DrawFunc = draw_element,
    ) -> IncrementalScheduler:
        """runtime_config の render 設定でスケジューラを作る。"""

        cfg = config if config is not None else runtime_config()
        return cls(
            surface,
            ticker,
            target_duration_ms=cfg.target_duration_ms,
            target_fps=cfg.target_fps,
            large_count_threshold=cfg.large_count_threshold,
            draw=draw,
        )

    @property
    def surface(self) -> Surface:
        return self._surface

    @property
    def active_pass(self) -> RenderPass | None:
        """最後に開始したパス（完了/取消済みを含む）を返す。"""

        return self._active

    @property
    def state(self) -> PassState:
        """最後に開始したパスの状態を返す。未開始なら IDLE。"""

        if self._active is None:
            return PassState.IDLE
        return self._active.state

    @property
    def is_drawing(self) -> bool:
        """描画中かどうかを返す。"""

        return self.state is PassState.RUNNING

    @property
    def progress(self) -> int:
        """最後に開始したパスの進捗（0..100）を返す。"""

        return 0 if self._active is None else int(self._active.progress)

    def batch_size_for(self, n: int) -> int:
        """要素数 n に対する batch_size を返す。"""

        return compute_batch_size(
            n,
            target_duration_ms=self._target_duration_ms,
            target_fps=self._target_fps,
            large_count_threshold=self._large_count_threshold,
        )

    def start(
        self,
        elements: Sequence[ElementPosition],
        shape: str,
        color: str,
        *,
        on_progress: ProgressCallback | None = None,
        on_complete: CompleteCallback | None = None,
    ) -> RenderPass:
        """新しいパスを開始し、最初の tick を予約する。

        Parameters
        ----------
        elements : Sequence[ElementPosition]
            描画順の要素列。
        shape : str
            ``"circles"`` / ``"rectangles"`` / ``"lines"``。
        color : str
            全要素に共通の色。
        on_progress : Callable[[int], None] or None, optional
            各 tick の描画前に進捗（0..100）を受け取る。完了時は 100。
        on_complete : Callable[[RenderPass], None] or None, optional
            完了時に 1 回だけ呼ばれる。取り消されたパスでは呼ばれない。

        Returns
        -------
        RenderPass
            開始したパス。

        Raises
        ------
        ValueError
            未知の shape、または解釈できない色の場合（tick は予約しない）。
        """

        if shape not in SHAPES:
            raise ValueError(f"未知の shape です: {shape!r}")
        parse_color(color)
        self.cancel()

        items = tuple(elements)
        batch_size = self.batch_size_for(len(items))
        p = RenderPass(
            elements=items,
            shape=str(shape),
            color=str(color),
            batch_size=batch_size,
            clock=RealTimeClock(),
            on_progress=on_progress,
            on_complete=on_complete,
        )
        self._active = p
        _logger.debug("Drawing %d elements with batch size %d", p.total, batch_size)
        self._schedule(p)
        return p

    def cancel(self) -> bool:
        """実行中のパスを取り消す。取り消した場合 True。"""

        p = self._active
        if p is None or p.state is not PassState.RUNNING:
            return False
        p.cancelled = True
        p.state = PassState.CANCELLED
        handle, p._handle = p._handle, None
        if handle is not None:
            self._ticker.cancel(handle)
        _logger.debug("render pass cancelled at %d/%d", p.cursor, p.total)
        return True

    def close(self) -> None:
        """所有コンテキストの破棄時に呼ぶ。実行中のパスを取り消す。"""

        self.cancel()

    def _schedule(self, p: RenderPass) -> None:
        p._handle = self._ticker.request_tick(lambda: self._tick(p))

    def _emit(self, p: RenderPass, progress: int) -> None:
        p.progress = int(progress)
        if p.on_progress is not None:
            p.on_progress(p.progress)

    def _tick(self, p: RenderPass) -> None:
        if p.cancelled:
            return
        p._handle = None
        p.ticks += 1

        n = p.total
        if p.cursor >= n:
            self._finish(p)
            return

        # 進捗は描画前（tick 開始時点）の位置を通知する。
        self._emit(p, progress_percent(p.cursor, n))
        if p.cancelled:
            return

        end = min(p.cursor + p.batch_size, n)
        surface = self._surface
        try:
            for element in p.elements[p.cursor : end]:
                self._draw(surface, element, p.shape, p.color)
                p.drawn += 1
        except Exception:
            # 描画失敗はホストの clock へ伝播させず、パスを打ち切る。
            _logger.exception("描画に失敗したためパスを中断しました: %d/%d", p.drawn, n)
            p.cancelled = True
            p.state = PassState.CANCELLED
            return
        p.cursor = end

        if p.cancelled:
            return
        if p.cursor < n:
            self._schedule(p)
        else:
            self._finish(p)

    def _finish(self, p: RenderPass) -> None:
        p.state = PassState.COMPLETED
        self._emit(p, 100)
        _logger.info(
            "Drawing completed in %.0fms (%d elements, %d ticks)",
            p.clock.elapsed_ms(),
            p.total,
            p.ticks,
        )
        if p.on_complete is not None:
            p.on_complete(p)


__all__ = [
    "CompleteCallback",
    "DrawFunc",
    "IncrementalScheduler",
    "PassState",
    "ProgressCallback",
    "RenderPass",
    "compute_batch_size",
    "progress_percent",
]
