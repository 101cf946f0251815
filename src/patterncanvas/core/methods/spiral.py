"""
どこで: `src/patterncanvas/core/methods/spiral.py`。アルキメデス螺旋メソッドの実体生成。
何を: 角度 ``i * rotation``・半径 ``spacing * i * expansion`` の螺旋上に要素を並べる。
なぜ: 中心から外へ広がる開いた曲線の代表として提供するため。
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from patterncanvas.core.element import ElementPosition
from patterncanvas.core.method_registry import method
from patterncanvas.core.parameters import param_field
from patterncanvas.core.scale import size_scale_factor

from .util import LINES, elements_from_arrays, sample_indices


@dataclass(frozen=True, slots=True)
class SpiralParams:
    """spiral のパラメータ。"""

    spacing: float = param_field(10.0, kind="float", ui_min=1.0, ui_max=50.0)
    rotation: float = param_field(0.1, kind="float", ui_min=0.01, ui_max=1.0)
    expansion: float = param_field(0.2, kind="float", ui_min=0.01, ui_max=1.0)


@method(params=SpiralParams)
def spiral(
    *,
    width: float,
    height: float,
    count: int,
    shape: str,
    params: SpiralParams,
) -> list[ElementPosition]:
    """螺旋上の count 点を生成する。

    Notes
    -----
    サイズは ``6s + (i/count) * 10s``（s はキャンバスのスケール係数）。
    lines では i -> i+1 へ接続し、最後の要素の終点は自分自身（長さ 0 の線分）になる。
    """

    n = int(count)
    cx = float(width) / 2.0
    cy = float(height) / 2.0
    s = size_scale_factor(width, height)
    base_size = 6.0 * s
    size_variation = 10.0 * s

    i = sample_indices(n + 1)
    angle = i * params.rotation
    radius = params.spacing * (i * params.expansion)
    xs = cx + radius * np.cos(angle)
    ys = cy + radius * np.sin(angle)

    x, y = xs[:n], ys[:n]
    size = base_size + (i[:n] / n) * size_variation
    if shape != LINES:
        return elements_from_arrays(x, y, size)

    end_x = xs[1:].copy()
    end_y = ys[1:].copy()
    end_x[-1] = x[-1]
    end_y[-1] = y[-1]
    return elements_from_arrays(x, y, size, end_x=end_x, end_y=end_y)
