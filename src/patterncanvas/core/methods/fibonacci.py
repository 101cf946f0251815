"""
どこで: `src/patterncanvas/core/methods/fibonacci.py`。黄金比螺旋メソッドの実体生成。
何を: 距離 ``phi^(2*ratio) * scale`` で turns 周する螺旋上に要素を並べる。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from patterncanvas.core.element import ElementPosition
from patterncanvas.core.method_registry import method
from patterncanvas.core.parameters import param_field

from .util import LINES, elements_from_arrays, open_path_mask, sample_indices

GOLDEN_RATIO = (1.0 + math.sqrt(5.0)) / 2.0


@dataclass(frozen=True, slots=True)
class FibonacciParams:
    """fibonacci のパラメータ。"""

    scale: float = param_field(5.0, kind="float", ui_min=1.0, ui_max=50.0)
    turns: float = param_field(12.0, kind="float", ui_min=1.0, ui_max=50.0)
    rotation: float = param_field(0.0, kind="float", ui_min=0.0, ui_max=6.283)


@method(params=FibonacciParams)
def fibonacci(
    *,
    width: float,
    height: float,
    count: int,
    shape: str,
    params: FibonacciParams,
) -> list[ElementPosition]:
    """黄金比螺旋上の count 点を生成する（開いた曲線）。"""

    n = int(count)
    cx = float(width) / 2.0
    cy = float(height) / 2.0

    ratio = sample_indices(n + 1) / n
    angle = params.rotation + 2.0 * math.pi * ratio * params.turns
    dist = np.power(GOLDEN_RATIO, 2.0 * ratio) * params.scale
    xs = cx + dist * np.cos(angle)
    ys = cy + dist * np.sin(angle)

    x, y = xs[:n], ys[:n]
    size = 4.0 + ratio[:n] * 12.0
    if shape != LINES:
        return elements_from_arrays(x, y, size)
    return elements_from_arrays(
        x, y, size, end_x=xs[1:], end_y=ys[1:], connected=open_path_mask(n)
    )
