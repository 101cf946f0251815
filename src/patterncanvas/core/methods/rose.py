"""
どこで: `src/patterncanvas/core/methods/rose.py`。バラ曲線メソッドの実体生成。
何を: ``r = S * (a*cos(k*θ) + b) / (a + b)`` を n 周分サンプリングし、閉曲線として要素を並べる。
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

import numpy as np

from patterncanvas.core.element import ElementPosition
from patterncanvas.core.method_registry import method
from patterncanvas.core.parameters import param_field

from .util import LINES, elements_from_arrays, sample_indices


@dataclass(frozen=True, slots=True)
class RoseParams:
    """rose のパラメータ。"""

    a: float = param_field(1.0, kind="float", ui_min=0.0, ui_max=10.0)
    b: float = param_field(1.0, kind="float", ui_min=0.0, ui_max=10.0)
    n: float = param_field(2.0, kind="float", ui_min=1.0, ui_max=20.0)
    k: float = param_field(1.0, kind="float", ui_min=1.0, ui_max=20.0)

    def normalized(self) -> RoseParams:
        """``a + b == 0`` のときは a/b を既定値へ戻した構造体を返す。"""

        if self.a + self.b == 0:
            defaults = RoseParams()
            return replace(self, a=defaults.a, b=defaults.b)
        return self


@method(params=RoseParams)
def rose(
    *,
    width: float,
    height: float,
    count: int,
    shape: str,
    params: RoseParams,
) -> list[ElementPosition]:
    """バラ曲線上の count 点を生成する。

    Notes
    -----
    S はキャンバス短辺の 1/3。サイズは ``6 + (i/count) * 6``。
    lines では最後の要素が ``θ = 0`` の点へ戻る。
    """

    n = int(count)
    cx = float(width) / 2.0
    cy = float(height) / 2.0
    scale = min(float(width), float(height)) / 3.0
    a, b = float(params.a), float(params.b)

    i = sample_indices(n)
    theta = i * ((2.0 * math.pi * params.n) / n)
    r = (scale * (a * np.cos(params.k * theta) + b)) / (a + b)
    x = cx + r * np.cos(theta)
    y = cy + r * np.sin(theta)
    size = 6.0 + (i / n) * 6.0
    if shape != LINES:
        return elements_from_arrays(x, y, size)
    return elements_from_arrays(x, y, size, end_x=np.roll(x, -1), end_y=np.roll(y, -1))
