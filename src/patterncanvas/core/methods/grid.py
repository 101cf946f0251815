"""
どこで: `src/patterncanvas/core/methods/grid.py`。グリッド配置メソッドの実体生成。
何を: columns x rows のセル中心に要素を並べ、lines では同じ行の右隣へだけ接続する。
なぜ: 背景パターンの基本要素として最も単純な規則配置を提供するため。
"""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np

from patterncanvas.core.element import ElementPosition
from patterncanvas.core.method_registry import method
from patterncanvas.core.parameters import param_field

from .util import LINES, elements_from_arrays


@dataclass(frozen=True, slots=True)
class GridParams:
    """grid のパラメータ。"""

    columns: int = param_field(5, kind="int", ui_min=1, ui_max=50)
    rows: int = param_field(5, kind="int", ui_min=1, ui_max=50)
    offset_x: float = param_field(0.0, kind="float", ui_min=-200.0, ui_max=200.0, key="offsetX")
    offset_y: float = param_field(0.0, kind="float", ui_min=-200.0, ui_max=200.0, key="offsetY")

    def normalized(self) -> GridParams:
        """1 未満の columns/rows を既定値へ戻した構造体を返す。"""

        defaults = GridParams()
        columns = self.columns if self.columns >= 1 else defaults.columns
        rows = self.rows if self.rows >= 1 else defaults.rows
        return replace(self, columns=columns, rows=rows)


@method(params=GridParams)
def grid(
    *,
    width: float,
    height: float,
    shape: str,
    params: GridParams,
    rng: np.random.Generator,
) -> list[ElementPosition]:
    """columns x rows の格子点を行優先で生成する。

    Notes
    -----
    要素数は `count` ではなく ``columns * rows`` で決まる。
    サイズは ``10 + U(0, 10)``（rng から行優先順に 1 個ずつ引く）。
    lines では col -> col+1 のみ接続し、行の最後の要素と行間は接続しない。
    """

    cols = int(params.columns)
    rows = int(params.rows)
    cell_w = float(width) / (cols + 1)
    cell_h = float(height) / (rows + 1)
    ox = float(params.offset_x)
    oy = float(params.offset_y)

    col = np.tile(np.arange(cols, dtype=np.float64), rows)
    row = np.repeat(np.arange(rows, dtype=np.float64), cols)

    x = (col + 1.0) * cell_w + ox
    y = (row + 1.0) * cell_h + oy
    size = 10.0 + rng.random(cols * rows) * 10.0

    if shape != LINES:
        return elements_from_arrays(x, y, size)

    end_x = (col + 2.0) * cell_w + ox
    return elements_from_arrays(x, y, size, end_x=end_x, end_y=y, connected=col < cols - 1)
