"""
どこで: `src/patterncanvas/core/methods/phyllotaxis.py`。葉序（ひまわり配置）メソッドの実体生成。
何を: 黄金角ずつ回しながら半径 ``√i`` で広がる点列を生成する。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from patterncanvas.core.element import ElementPosition
from patterncanvas.core.method_registry import method
from patterncanvas.core.parameters import param_field

from .util import LINES, elements_from_arrays, sample_indices

GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))

# lines で接続する間隔（全点を結ぶと線が混み合うため）。
CONNECT_EVERY = 5


@dataclass(frozen=True, slots=True)
class PhyllotaxisParams:
    """phyllotaxis のパラメータ。"""

    n: float = param_field(1.0, kind="float", ui_min=0.1, ui_max=5.0)
    k: float = param_field(1.0, kind="float", ui_min=0.1, ui_max=5.0)


@method(params=PhyllotaxisParams)
def phyllotaxis(
    *,
    width: float,
    height: float,
    count: int,
    shape: str,
    params: PhyllotaxisParams,
) -> list[ElementPosition]:
    """葉序配置の count 点を生成する。

    Notes
    -----
    ``θ = i * GOLDEN_ANGLE * n``, ``r = S * √i * k``（S はキャンバス短辺の 1/25）。
    lines では ``i % 5 == 0`` の要素だけ i+1 へ接続し、閉じない。
    """

    count_i = int(count)
    cx = float(width) / 2.0
    cy = float(height) / 2.0
    scale = min(float(width), float(height)) / 25.0

    i = sample_indices(count_i + 1)
    theta = i * GOLDEN_ANGLE * params.n
    r = scale * np.sqrt(i) * params.k
    xs = cx + r * np.cos(theta)
    ys = cy + r * np.sin(theta)

    x, y = xs[:count_i], ys[:count_i]
    size = 4.0 + 8.0 * np.sqrt(i[:count_i] / count_i)
    if shape != LINES:
        return elements_from_arrays(x, y, size)

    idx = np.arange(count_i)
    connected = (idx < count_i - 1) & (idx % CONNECT_EVERY == 0)
    return elements_from_arrays(
        x, y, size, end_x=xs[1:], end_y=ys[1:], connected=connected
    )
