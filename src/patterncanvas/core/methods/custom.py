"""
どこで: `src/patterncanvas/core/methods/custom.py`。ユーザー定義パターンの登録と実行。
何を: ホストが登録した callable ``(width, height, count, color) -> 要素の列`` を呼び、
    検証済みの ElementPosition 列へ変換する。
なぜ: 文字列コードの動的評価を避け、差し替え可能なストラテジとしてパターンを受け付けるため。
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, ItemsView, Mapping, Sequence
from dataclasses import dataclass
from numbers import Real
from typing import Any, Callable

from patterncanvas.core.element import ElementPosition
from patterncanvas.core.method_registry import method
from patterncanvas.core.parameters import param_field

from .util import LINES

_logger = logging.getLogger(__name__)

CustomPatternFunc = Callable[[float, float, int, str], Iterable[Any]]

DEFAULT_CUSTOM_SIZE = 8.0


class CustomPatternRegistry:
    """カスタムパターン名と callable を対応付けるレジストリ。"""

    def __init__(self) -> None:
        self._items: dict[str, CustomPatternFunc] = {}

    def _register(self, name: str, func: CustomPatternFunc, *, overwrite: bool = True) -> None:
        if not overwrite and name in self._items:
            raise ValueError(f"custom pattern '{name}' は既に登録されている")
        self._items[name] = func

    def unregister(self, name: str) -> None:
        """登録を解除する（未登録なら何もしない）。"""
        self._items.pop(name, None)

    def get(self, name: str) -> CustomPatternFunc:
        """名前に対応する callable を返す。未登録なら KeyError。"""
        return self._items[name]

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def items(self) -> ItemsView[str, CustomPatternFunc]:
        return self._items.items()


custom_pattern_registry = CustomPatternRegistry()
"""グローバルなカスタムパターンレジストリインスタンス。"""


def custom_pattern(
    func: CustomPatternFunc | None = None,
    *,
    name: str | None = None,
    overwrite: bool = True,
):
    """カスタムパターン登録用デコレータ。

    Examples
    --------
    @custom_pattern
    def diagonal(width, height, count, color):
        return [{"x": width * i / count, "y": height * i / count} for i in range(count)]
    """

    def decorator(f: CustomPatternFunc) -> CustomPatternFunc:
        custom_pattern_registry._register(name or f.__name__, f, overwrite=overwrite)
        return f

    if func is None:
        return decorator
    return decorator(func)


def _field(entry: object, key: str) -> object:
    if isinstance(entry, Mapping):
        return entry.get(key)
    return getattr(entry, key, None)


def _finite_number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    out = float(value)
    return out if math.isfinite(out) else None


def _entry_xy(entry: object) -> tuple[float, float] | None:
    if entry is None:
        return None
    x = _finite_number(_field(entry, "x"))
    y = _finite_number(_field(entry, "y"))
    if x is None or y is None:
        return None
    return x, y


def _entry_size(entry: object) -> float:
    size = _finite_number(_field(entry, "size"))
    # 0 や欠落は既定サイズ扱い。
    if size is None or size == 0:
        return DEFAULT_CUSTOM_SIZE
    return size


def _collect_entries(
    func: CustomPatternFunc,
    width: float,
    height: float,
    count: int,
    color: str,
) -> list[object]:
    try:
        result = func(width, height, count, color)
    except Exception:
        _logger.exception("custom pattern の実行に失敗しました: %r", func)
        return []

    if isinstance(result, (str, bytes, Mapping)) or not isinstance(result, Iterable):
        _logger.warning(
            "custom pattern は要素の列を返す必要があります: got=%s", type(result).__name__
        )
        return []
    if isinstance(result, Sequence):
        return list(result)

    entries: list[object] = []
    try:
        for entry in result:
            entries.append(entry)
    except Exception:
        _logger.exception(
            "custom pattern の列挙中に失敗しました（%d 件までを使用）", len(entries)
        )
    return entries


def run_custom_pattern(
    func: CustomPatternFunc,
    *,
    width: float,
    height: float,
    count: int,
    shape: str,
    color: str,
) -> list[ElementPosition]:
    """callable を実行し、検証済みの要素列を返す。

    Notes
    -----
    例外は外へ出さない。callable 内の例外、列でない戻り値はログに残して空列
    （列挙途中の例外ではそれまでの要素）を返す。
    有限の数値 x/y を持たないエントリは個別にスキップする。
    lines では i 番目を「戻り値の i+1 番目」へ接続する（i+1 番目が不正なら接続しない）。
    """

    entries = _collect_entries(func, width, height, count, color)
    points = [_entry_xy(entry) for entry in entries]

    out: list[ElementPosition] = []
    skipped = 0
    for i, (entry, xy) in enumerate(zip(entries, points)):
        if xy is None:
            skipped += 1
            continue
        x, y = xy
        size = _entry_size(entry)
        nxt = points[i + 1] if i + 1 < len(points) else None
        if shape == LINES and nxt is not None:
            out.append(ElementPosition(x=x, y=y, size=size, end_x=nxt[0], end_y=nxt[1]))
        else:
            out.append(ElementPosition(x=x, y=y, size=size))

    if skipped:
        _logger.debug("custom pattern: 不正な要素を %d 件スキップしました", skipped)
    return out


@dataclass(frozen=True, slots=True)
class CustomParams:
    """custom のパラメータ。"""

    pattern: str = param_field("circle", kind="str")


@method(params=CustomParams)
def custom(
    *,
    width: float,
    height: float,
    count: int,
    shape: str,
    color: str,
    params: CustomParams,
) -> list[ElementPosition]:
    """登録済みカスタムパターン `params.pattern` を実行する。"""

    try:
        func = custom_pattern_registry.get(params.pattern)
    except KeyError:
        _logger.warning("未登録の custom pattern です: %r", params.pattern)
        return []
    return run_custom_pattern(
        func, width=width, height=height, count=count, shape=shape, color=color
    )


@custom_pattern
def circle(width: float, height: float, count: int, color: str) -> list[dict[str, float]]:
    """キャンバス短辺の 1/3 を半径とする円周上に、サイズを揺らした要素を並べる。"""

    radius = min(width, height) / 3.0
    out: list[dict[str, float]] = []
    for i in range(int(count)):
        angle = i * (2.0 * math.pi / count)
        out.append(
            {
                "x": width / 2.0 + radius * math.cos(angle),
                "y": height / 2.0 + radius * math.sin(angle),
                "size": 10.0 + 5.0 * math.sin(i * 0.5),
            }
        )
    return out


@custom_pattern
def empty(width: float, height: float, count: int, color: str) -> list[dict[str, float]]:
    """何も描かないパターン。"""

    return []


__all__ = [
    "CustomParams",
    "CustomPatternFunc",
    "CustomPatternRegistry",
    "custom_pattern",
    "custom_pattern_registry",
    "run_custom_pattern",
]
