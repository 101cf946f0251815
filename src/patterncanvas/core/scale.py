# どこで: `src/patterncanvas/core/scale.py`。
# 何を: キャンバス対角長から無次元のスケール係数を求め、距離系パラメータの事前スケールを提供する。
# なぜ: キャンバスサイズが変わってもパターンの見た目の比率を保つため。

from __future__ import annotations

import math
from collections.abc import Mapping
from numbers import Real

BASE_RESOLUTION: tuple[int, int] = (1280, 720)

# メソッドごとの「キャンバスに比例させる」パラメータ（フォーム側のキー名）。
_PRESCALED_KEYS: dict[str, tuple[str, ...]] = {
    "sine": ("amplitude",),
    "spiral": ("spacing",),
    "circular": ("radius", "radiusVariation", "radius_variation"),
    "fibonacci": ("scale",),
    "lissajous": ("scale",),
}


def size_scale_factor(width: float, height: float) -> float:
    """キャンバス対角長 / 基準解像度（1280x720）の対角長を返す。"""

    base_w, base_h = BASE_RESOLUTION
    return float(math.hypot(float(width), float(height)) / math.hypot(base_w, base_h))


def prescale_params(
    method_type: str,
    params: Mapping[str, object],
    width: float,
    height: float,
) -> dict[str, object]:
    """距離系パラメータにスケール係数を掛けた params のコピーを返す。

    Notes
    -----
    数値として与えられたキーだけを変換する（欠落キーは生成器側の既定値のまま）。
    生成器自身はスケールに依存しないため、呼び出し側が任意で使う。
    """

    out = dict(params)
    keys = _PRESCALED_KEYS.get(str(method_type), ())
    if not keys:
        return out
    factor = size_scale_factor(width, height)
    for key in keys:
        value = out.get(key)
        if isinstance(value, Real) and not isinstance(value, bool):
            out[key] = float(value) * factor
    return out


__all__ = ["BASE_RESOLUTION", "prescale_params", "size_scale_factor"]
