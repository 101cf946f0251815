"""
どこで: `src/patterncanvas/core/methods/sine.py`。正弦波メソッドの実体生成。
何を: キャンバス幅を count 等分した x で正弦波をサンプリングし、開いた折れ線として接続する。
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from patterncanvas.core.element import ElementPosition
from patterncanvas.core.method_registry import method
from patterncanvas.core.parameters import param_field

from .util import LINES, elements_from_arrays, open_path_mask, sample_indices


@dataclass(frozen=True, slots=True)
class SineParams:
    """sine のパラメータ。"""

    amplitude: float = param_field(100.0, kind="float", ui_min=0.0, ui_max=400.0)
    frequency: float = param_field(0.05, kind="float", ui_min=0.0, ui_max=0.5)
    phase: float = param_field(0.0, kind="float", ui_min=0.0, ui_max=6.283)


@method(params=SineParams)
def sine(
    *,
    width: float,
    height: float,
    count: int,
    shape: str,
    params: SineParams,
) -> list[ElementPosition]:
    """``y = height/2 + amplitude * sin(frequency * x + phase)`` を count 点生成する。"""

    n = int(count)
    step = float(width) / n
    # 終点用に 1 点多くサンプルする。
    i = sample_indices(n + 1)
    xs = i * step
    ys = float(height) / 2.0 + params.amplitude * np.sin(params.frequency * xs + params.phase)

    x, y = xs[:n], ys[:n]
    if shape != LINES:
        return elements_from_arrays(x, y, 8.0)
    return elements_from_arrays(
        x, y, 8.0, end_x=xs[1:], end_y=ys[1:], connected=open_path_mask(n)
    )
