"""
どこで: `src/patterncanvas/core/color.py`。
何を: 色文字列（``"#3498db"`` / ``"red"`` / ``"rgb(...)"``）の解釈と RGB 変換ユーティリティを提供する。
なぜ: 設定構築時に 1 回だけ色を検証し、ラスタ/SVG 出力で同じ RGB を共有するため。
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, cast

from PIL import ImageColor


@lru_cache(maxsize=256)
def parse_color(text: str) -> tuple[int, int, int]:
    """色文字列を RGB255 タプル `(r, g, b)` に変換して返す。

    Raises
    ------
    ValueError
        Pillow が解釈できない色文字列の場合。
    """

    try:
        rgb = ImageColor.getrgb(str(text).strip())
    except ValueError as exc:
        raise ValueError(f"色を解釈できません: {text!r}") from exc
    return coerce_rgb255(rgb[:3])


def coerce_rgb255(value: object) -> tuple[int, int, int]:
    """値を RGB255 タプル `(r, g, b)`（0..255）に正規化して返す。

    Raises
    ------
    ValueError
        長さ 3 のシーケンスでない場合。
    """

    try:
        r, g, b = value  # type: ignore[misc]
    except Exception as exc:
        raise ValueError(f"rgb value must be a length-3 sequence: {value!r}") from exc

    def _clamp(v: object) -> int:
        iv = int(cast(Any, v))
        return 0 if iv < 0 else 255 if iv > 255 else iv

    return _clamp(r), _clamp(g), _clamp(b)


def rgb255_to_hex(rgb: tuple[int, int, int]) -> str:
    """RGB255 を ``#RRGGBB`` に変換して返す。"""

    r, g, b = coerce_rgb255(rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def color_to_hex(text: str) -> str:
    """色文字列を正規化した ``#RRGGBB`` で返す。"""

    return rgb255_to_hex(parse_color(text))


__all__ = ["coerce_rgb255", "color_to_hex", "parse_color", "rgb255_to_hex"]
