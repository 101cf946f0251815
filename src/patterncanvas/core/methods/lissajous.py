"""
どこで: `src/patterncanvas/core/methods/lissajous.py`。リサージュ曲線メソッドの実体生成。
何を: ``t ∈ [0, 2π)`` を count 等分し、閉曲線として要素を並べる。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from patterncanvas.core.element import ElementPosition
from patterncanvas.core.method_registry import method
from patterncanvas.core.parameters import param_field

from .util import LINES, elements_from_arrays, sample_indices


@dataclass(frozen=True, slots=True)
class LissajousParams:
    """lissajous のパラメータ。"""

    a: float = param_field(3.0, kind="float", ui_min=1.0, ui_max=10.0)
    b: float = param_field(4.0, kind="float", ui_min=1.0, ui_max=10.0)
    delta: float = param_field(0.0, kind="float", ui_min=0.0, ui_max=6.283)
    scale: float = param_field(150.0, kind="float", ui_min=10.0, ui_max=500.0)


@method(params=LissajousParams)
def lissajous(
    *,
    width: float,
    height: float,
    count: int,
    shape: str,
    params: LissajousParams,
) -> list[ElementPosition]:
    """リサージュ曲線上の count 点を生成する。

    Notes
    -----
    ``x = cx + scale * sin(a*t + delta)``, ``y = cy + scale * sin(b*t)``。
    lines では最後の要素が ``t = 0`` の点へ戻る。
    """

    n = int(count)
    cx = float(width) / 2.0
    cy = float(height) / 2.0

    t = sample_indices(n) * ((2.0 * math.pi) / n)
    x = cx + params.scale * np.sin(params.a * t + params.delta)
    y = cy + params.scale * np.sin(params.b * t)
    if shape != LINES:
        return elements_from_arrays(x, y, 8.0)
    return elements_from_arrays(x, y, 8.0, end_x=np.roll(x, -1), end_y=np.roll(y, -1))
