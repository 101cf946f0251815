"""
どこで: `src/patterncanvas/core/generate.py`。
何を: キャンバス寸法・要素数・メソッド名・params から ElementPosition 列を生成する入口を提供する。
なぜ: 生成の失敗や退化入力をここで吸収し、スケジューラ/描画側へ例外を漏らさないため。
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

import numpy as np

from patterncanvas.core.builtins import ensure_builtin_methods_registered
from patterncanvas.core.element import ElementPosition
from patterncanvas.core.method_registry import method_registry
from patterncanvas.core.methods.custom import CustomPatternFunc, run_custom_pattern

_logger = logging.getLogger(__name__)

DEFAULT_METHOD = "spiral"

# count を無視して columns x rows を使うメソッド。
_COUNT_INDEPENDENT_METHODS = frozenset({"grid"})


def _is_degenerate_extent(width: float, height: float) -> bool:
    w = float(width)
    h = float(height)
    if not (math.isfinite(w) and math.isfinite(h)):
        return True
    return w <= 0 or h <= 0


def generate(
    width: float,
    height: float,
    count: int,
    shape: str,
    color: str,
    method_type: str | None = DEFAULT_METHOD,
    params: Mapping[str, object] | object | None = None,
    *,
    rng: np.random.Generator | None = None,
    custom: CustomPatternFunc | None = None,
) -> list[ElementPosition]:
    """描画メソッドに従って要素列を生成する。

    Parameters
    ----------
    width, height : float
        キャンバス寸法（px）。どちらかが 0 以下なら空列。
    count : int
        目標要素数。0 以下なら空列（grid は count を使わない）。
    shape : str
        ``"circles"`` / ``"rectangles"`` / ``"lines"``。lines のとき線分終点を埋める。
    color : str
        パス全体の色。custom パターンへそのまま渡す。
    method_type : str or None, optional
        メソッド名。None/空文字は ``"spiral"``。
    params : Mapping or パラメータ構造体 or None, optional
        メソッドのパラメータ。欠落/不正値は既定値で埋める。
    rng : np.random.Generator or None, optional
        grid/circular の乱数源。None の場合は毎回新しい `default_rng()`。
    custom : callable or None, optional
        指定すると method_type に関わらずこの callable をカスタムパターンとして実行する。

    Returns
    -------
    list[ElementPosition]
        生成順の要素列。

    Notes
    -----
    標準メソッドは例外を投げない。未登録のメソッド名はログに残して空列を返す。
    """

    ensure_builtin_methods_registered()

    name = str(method_type) if method_type else DEFAULT_METHOD
    if _is_degenerate_extent(width, height):
        return []

    n = int(count)
    if custom is not None:
        if n <= 0:
            return []
        return run_custom_pattern(
            custom, width=float(width), height=float(height), count=n, shape=shape, color=color
        )

    if name not in method_registry:
        _logger.error("未登録の描画メソッドです: %r", name)
        return []
    if n <= 0 and name not in _COUNT_INDEPENDENT_METHODS:
        return []

    resolved = method_registry.coerce(name, params)
    return method_registry[name](
        width=float(width),
        height=float(height),
        count=n,
        shape=str(shape),
        color=str(color),
        params=resolved,
        rng=rng if rng is not None else np.random.default_rng(),
    )


__all__ = ["DEFAULT_METHOD", "generate"]
