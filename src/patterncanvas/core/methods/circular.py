"""
どこで: `src/patterncanvas/core/methods/circular.py`。円周配置メソッドの実体生成。
何を: 円周を count 等分した角度に要素を並べ、lines では最後の要素を先頭の角度へ戻して閉じる。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from patterncanvas.core.element import ElementPosition
from patterncanvas.core.method_registry import method
from patterncanvas.core.parameters import param_field
from patterncanvas.core.scale import size_scale_factor

from .util import LINES, elements_from_arrays, sample_indices


@dataclass(frozen=True, slots=True)
class CircularParams:
    """circular のパラメータ。"""

    radius: float = param_field(150.0, kind="float", ui_min=10.0, ui_max=500.0)
    radius_variation: float = param_field(
        0.0, kind="float", ui_min=0.0, ui_max=100.0, key="radiusVariation"
    )
    angle_offset: float = param_field(
        0.0, kind="float", ui_min=0.0, ui_max=6.283, key="angleOffset"
    )


@method(params=CircularParams)
def circular(
    *,
    width: float,
    height: float,
    count: int,
    shape: str,
    params: CircularParams,
    rng: np.random.Generator,
) -> list[ElementPosition]:
    """円周上の count 点を生成する。

    Notes
    -----
    radius_variation > 0 のとき、要素ごとに半径 ``radius + U(-1, 1) * radius_variation`` と
    サイズ ``8s + U(0, 8s)`` を rng から引く。0 のときは乱数を一切引かない。
    lines の終点は「その要素の半径」で次の角度（最後は先頭の角度）を評価した点。
    """

    n = int(count)
    cx = float(width) / 2.0
    cy = float(height) / 2.0
    s = size_scale_factor(width, height)
    base_size = 8.0 * s
    size_variation = 8.0 * s

    step = (2.0 * math.pi) / n
    angle = params.angle_offset + sample_indices(n) * step

    variation = float(params.radius_variation)
    if variation > 0:
        u = rng.random((n, 2))
        radius = params.radius + (u[:, 0] * 2.0 - 1.0) * variation
        size = base_size + u[:, 1] * size_variation
    else:
        radius = np.full((n,), float(params.radius), dtype=np.float64)
        size = np.full((n,), base_size, dtype=np.float64)

    x = cx + radius * np.cos(angle)
    y = cy + radius * np.sin(angle)
    if shape != LINES:
        return elements_from_arrays(x, y, size)

    next_angle = np.roll(angle, -1)
    end_x = cx + radius * np.cos(next_angle)
    end_y = cy + radius * np.sin(next_angle)
    return elements_from_arrays(x, y, size, end_x=end_x, end_y=end_y)
