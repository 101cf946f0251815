"""
どこで: `src/patterncanvas/core/presets.py`。
何を: キャンバスサイズのプリセットと、名前付きのアートプリセット（Settings）を提供する。
なぜ: CLI やフォームが「よく使う組み合わせ」を 1 行で呼び出せるようにするため。
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import Any

from patterncanvas.core.settings import Settings

SIZE_PRESETS: Mapping[str, tuple[int, int]] = MappingProxyType(
    {
        "A4 Landscape": (842, 595),
        "A4 Portrait": (595, 842),
        "A3 Landscape": (1191, 842),
        "A3 Portrait": (842, 1191),
        "Square": (800, 800),
        "HD": (1280, 720),
        "4K": (3840, 2160),
    }
)
"""名前 -> (width, height)。A 判は 72 DPI 換算。"""

_ART_PRESETS: dict[str, dict[str, Any]] = {
    "Bubbles": {
        "shape": "circles",
        "color": "#3498db",
        "count": 30,
        "drawingMethod": {"type": "circular", "params": {"radius": 200, "radiusVariation": 60}},
    },
    "Neon Grid": {
        "shape": "rectangles",
        "color": "#ff00ff",
        "count": 50,
        "drawingMethod": {"type": "grid", "params": {"columns": 10, "rows": 5}},
    },
    "Lasers": {
        "shape": "lines",
        "color": "#ff3300",
        "count": 70,
        "drawingMethod": {"type": "lissajous", "params": {"a": 3, "b": 4, "scale": 250}},
    },
    "Starfield": {
        "shape": "circles",
        "color": "#ffffff",
        "count": 100,
        "drawingMethod": {"type": "phyllotaxis", "params": {"n": 1, "k": 1}},
    },
    "Sunflower": {
        "shape": "circles",
        "color": "#f49d37",
        "count": 800,
        "drawingMethod": {"type": "phyllotaxis", "params": {"n": 1, "k": 0.6}},
    },
    "Rose Window": {
        "shape": "lines",
        "color": "#8e44ad",
        "count": 600,
        "drawingMethod": {"type": "rose", "params": {"a": 1, "b": 0, "n": 1, "k": 5}},
    },
}


def art_preset_names() -> tuple[str, ...]:
    """アートプリセット名を定義順で返す。"""

    return tuple(_ART_PRESETS.keys())


def art_preset(
    name: str,
    *,
    canvas_size: tuple[int, int] | None = None,
) -> Settings:
    """名前からアートプリセットの Settings を返す。

    Parameters
    ----------
    name : str
        プリセット名（`art_preset_names()` 参照）。
    canvas_size : tuple[int, int] or None, optional
        キャンバス寸法。None の場合は 800x600。

    Raises
    ------
    KeyError
        未知のプリセット名の場合。
    """

    try:
        spec = _ART_PRESETS[name]
    except KeyError as exc:
        known = ", ".join(art_preset_names())
        raise KeyError(f"未知のプリセットです: {name!r}（候補: {known}）") from exc

    settings = Settings.from_mapping({**spec, "canvasWidth": 800, "canvasHeight": 600})
    if canvas_size is not None:
        w, h = canvas_size
        settings = replace(settings, canvas_width=int(w), canvas_height=int(h))
    return settings


def size_preset(name: str) -> tuple[int, int]:
    """名前からキャンバスサイズを返す。未知の名前は KeyError。"""

    try:
        return SIZE_PRESETS[name]
    except KeyError as exc:
        known = ", ".join(SIZE_PRESETS.keys())
        raise KeyError(f"未知のサイズプリセットです: {name!r}（候補: {known}）") from exc


__all__ = ["SIZE_PRESETS", "art_preset", "art_preset_names", "size_preset"]
