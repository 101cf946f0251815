"""
どこで: `src/patterncanvas/core/settings.py`。
何を: 1 回の描画パスの入力スナップショット `Settings` と `DrawingMethodSpec` を定義する。
なぜ: フォーム由来の値（camelCase dict）を構築時に 1 回だけ検証・正規化し、以降は不変値として扱うため。
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from patterncanvas.core.builtins import ensure_builtin_methods_registered
from patterncanvas.core.color import parse_color
from patterncanvas.core.generate import DEFAULT_METHOD
from patterncanvas.core.method_registry import method_registry
from patterncanvas.core.scale import prescale_params

SHAPES: tuple[str, ...] = ("circles", "rectangles", "lines")

MIN_CANVAS_SIZE = 50
MAX_CANVAS_SIZE = 5000


def clamp_canvas_size(value: object) -> int:
    """フォーム入力のキャンバス寸法を [MIN_CANVAS_SIZE, MAX_CANVAS_SIZE] に丸めて返す。"""

    try:
        v = int(float(str(value)))
    except ValueError:
        return MIN_CANVAS_SIZE
    return max(MIN_CANVAS_SIZE, min(MAX_CANVAS_SIZE, v))


@dataclass(frozen=True, slots=True)
class DrawingMethodSpec:
    """描画メソッド名と、そのフォーム由来パラメータ。"""

    type: str = DEFAULT_METHOD
    params: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        ensure_builtin_methods_registered()
        name = str(self.type) if self.type else DEFAULT_METHOD
        if name not in method_registry:
            known = ", ".join(method_registry.names())
            raise KeyError(f"未知の描画メソッドです: {name!r}（候補: {known}）")
        if not isinstance(self.params, Mapping):
            raise ValueError(f"params は mapping である必要があります: got={self.params!r}")
        object.__setattr__(self, "type", name)
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def resolved(self) -> Any:
        """params を型付きパラメータ構造体へ正規化して返す。"""

        return method_registry.coerce(self.type, self.params)


@dataclass(frozen=True, slots=True)
class Settings:
    """1 回の描画パスの入力。

    Parameters
    ----------
    shape : str
        ``"circles"`` / ``"rectangles"`` / ``"lines"``。
    color : str
        全要素に共通の塗り/線の色（Pillow の色文字列）。
    count : int
        目標要素数（grid は columns x rows を使う）。
    canvas_width, canvas_height : int
        キャンバス寸法（px）。
    drawing_method : DrawingMethodSpec
        描画メソッドとパラメータ。
    scale_to_canvas : bool
        True の場合、距離系パラメータをキャンバスのスケール係数で事前スケールする。
    seed : int or None
        grid/circular の乱数 seed。None は毎回異なる。
    """

    shape: str = "circles"
    color: str = "#3498db"
    count: int = 100
    canvas_width: int = 800
    canvas_height: int = 600
    drawing_method: DrawingMethodSpec = field(default_factory=DrawingMethodSpec)
    scale_to_canvas: bool = False
    seed: int | None = None
    method_params: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.shape not in SHAPES:
            raise ValueError(f"未知の shape です: {self.shape!r}（候補: {', '.join(SHAPES)}）")
        parse_color(self.color)
        if int(self.count) < 0:
            raise ValueError(f"count は 0 以上である必要があります: got={self.count!r}")
        if int(self.canvas_width) < 0 or int(self.canvas_height) < 0:
            raise ValueError(
                "canvas_width/canvas_height は 0 以上である必要があります: "
                f"got=({self.canvas_width!r}, {self.canvas_height!r})"
            )
        object.__setattr__(self, "count", int(self.count))
        object.__setattr__(self, "canvas_width", int(self.canvas_width))
        object.__setattr__(self, "canvas_height", int(self.canvas_height))

        params: Mapping[str, object] = self.drawing_method.params
        if self.scale_to_canvas:
            params = prescale_params(
                self.drawing_method.type, params, self.canvas_width, self.canvas_height
            )
        object.__setattr__(
            self, "method_params", method_registry.coerce(self.drawing_method.type, params)
        )

    @property
    def canvas_size(self) -> tuple[int, int]:
        """(width, height) を返す。"""

        return self.canvas_width, self.canvas_height

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Settings:
        """フォーム形式の dict（camelCase 可）から Settings を構築する。

        Examples
        --------
        >>> Settings.from_mapping({
        ...     "shape": "lines", "color": "#ff3300", "count": 70,
        ...     "canvasWidth": 800, "canvasHeight": 600,
        ...     "drawingMethod": {"type": "rose", "params": {"k": 5}},
        ... })  # doctest: +SKIP
        """

        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        defaults = cls()
        method_raw = pick("drawing_method", "drawingMethod")
        if method_raw is None:
            method = DrawingMethodSpec()
        elif isinstance(method_raw, DrawingMethodSpec):
            method = method_raw
        elif isinstance(method_raw, Mapping):
            method = DrawingMethodSpec(
                type=str(method_raw.get("type") or DEFAULT_METHOD),
                params=dict(method_raw.get("params") or {}),
            )
        else:
            raise ValueError(f"drawingMethod は mapping である必要があります: got={method_raw!r}")

        seed = pick("seed")
        return cls(
            shape=str(pick("shape", default=defaults.shape)),
            color=str(pick("color", default=defaults.color)),
            count=int(pick("count", default=defaults.count)),
            canvas_width=int(pick("canvas_width", "canvasWidth", default=defaults.canvas_width)),
            canvas_height=int(
                pick("canvas_height", "canvasHeight", default=defaults.canvas_height)
            ),
            drawing_method=method,
            scale_to_canvas=bool(pick("scale_to_canvas", "scaleToCanvas", default=False)),
            seed=None if seed is None else int(seed),
        )


__all__ = [
    "DrawingMethodSpec",
    "MAX_CANVAS_SIZE",
    "MIN_CANVAS_SIZE",
    "SHAPES",
    "Settings",
    "clamp_canvas_size",
]
