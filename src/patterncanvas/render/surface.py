"""
どこで: `src/patterncanvas/render/surface.py`。
何を: 描画先サーフェスのプロトコルと、Pillow ベースのラスタ実装・SVG 記録実装を提供する。
なぜ: プリミティブ描画とスケジューラを特定の描画 API から切り離し、PNG/SVG の両方へ出せるようにするため。
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Protocol

from PIL import Image, ImageDraw

from patterncanvas.core.color import color_to_hex, parse_color

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3


class Surface(Protocol):
    """プリミティブ描画を受け付ける 2D サーフェス。"""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def clear(self) -> None: ...

    def fill_circle(self, cx: float, cy: float, radius: float, color: str) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None: ...

    def stroke_line(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        width: float,
        color: str,
    ) -> None: ...


def _finite(*values: float) -> bool:
    return all(math.isfinite(float(v)) for v in values)


class RasterSurface:
    """Pillow の RGB 画像へ描くサーフェス。

    Notes
    -----
    半径/辺長が 0 以下、または座標が非有限のプリミティブは描かない。
    """

    def __init__(self, width: int, height: int, *, background: str = "#ffffff") -> None:
        self._background = parse_color(background)
        self.resize(width, height)

    @property
    def width(self) -> int:
        return int(self.image.width)

    @property
    def height(self) -> int:
        return int(self.image.height)

    def resize(self, width: int, height: int) -> None:
        """寸法を変えて背景色で作り直す。"""

        w, h = int(width), int(height)
        if w < 0 or h < 0:
            raise ValueError(f"サーフェス寸法は 0 以上である必要があります: got=({w}, {h})")
        self.image = Image.new("RGB", (w, h), self._background)
        self._draw = ImageDraw.Draw(self.image)

    def clear(self) -> None:
        """全面を背景色で塗りつぶす。"""

        self._draw.rectangle([0, 0, self.image.width, self.image.height], fill=self._background)

    def fill_circle(self, cx: float, cy: float, radius: float, color: str) -> None:
        if not _finite(cx, cy, radius) or radius <= 0:
            return
        self._draw.ellipse(
            [cx - radius, cy - radius, cx + radius, cy + radius], fill=parse_color(color)
        )

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        if not _finite(x, y, w, h) or w <= 0 or h <= 0:
            return
        self._draw.rectangle([x, y, x + w, y + h], fill=parse_color(color))

    def stroke_line(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        width: float,
        color: str,
    ) -> None:
        if not _finite(x0, y0, x1, y1, width):
            return
        stroke = max(1, int(round(width)))
        self._draw.line([(x0, y0), (x1, y1)], fill=parse_color(color), width=stroke)

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """(x, y) の RGB を返す。"""

        r, g, b = self.image.getpixel((int(x), int(y)))[:3]
        return int(r), int(g), int(b)

    def save_png(self, path: str | Path) -> Path:
        """画像を PNG として保存する。"""

        _path = Path(path)
        _path.parent.mkdir(parents=True, exist_ok=True)
        self.image.save(_path, format="PNG")
        return _path


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


class SvgSurface:
    """描いたプリミティブを SVG 要素として記録するサーフェス。"""

    def __init__(self, width: int, height: int, *, background: str = "#ffffff") -> None:
        self._background = color_to_hex(background)
        self.resize(width, height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def elements(self) -> tuple[str, ...]:
        """記録済みの SVG 要素文字列を返す。"""

        return tuple(self._elements)

    def resize(self, width: int, height: int) -> None:
        """寸法を変えて記録を破棄する。"""

        w, h = int(width), int(height)
        if w < 0 or h < 0:
            raise ValueError(f"サーフェス寸法は 0 以上である必要があります: got=({w}, {h})")
        self._width = w
        self._height = h
        self._elements: list[str] = []

    def clear(self) -> None:
        self._elements.clear()

    def fill_circle(self, cx: float, cy: float, radius: float, color: str) -> None:
        if not _finite(cx, cy, radius) or radius <= 0:
            return
        self._elements.append(
            f'<circle cx="{_fmt(cx)}" cy="{_fmt(cy)}" r="{_fmt(radius)}" '
            f'fill="{color_to_hex(color)}" />'
        )

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        if not _finite(x, y, w, h) or w <= 0 or h <= 0:
            return
        self._elements.append(
            f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(w)}" height="{_fmt(h)}" '
            f'fill="{color_to_hex(color)}" />'
        )

    def stroke_line(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        width: float,
        color: str,
    ) -> None:
        if not _finite(x0, y0, x1, y1, width):
            return
        self._elements.append(
            f'<line x1="{_fmt(x0)}" y1="{_fmt(y0)}" x2="{_fmt(x1)}" y2="{_fmt(y1)}" '
            f'stroke="{color_to_hex(color)}" stroke-width="{_fmt(width)}" />'
        )

    def to_svg(self) -> str:
        """SVG 文書の文字列を返す。"""

        lines: list[str] = []
        lines.append('<?xml version="1.0" encoding="UTF-8"?>')
        lines.append(
            (
                f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {self._width} {self._height}" '
                f'width="{self._width}" height="{self._height}">'
            )
        )
        lines.append(
            f'  <rect x="0" y="0" width="{self._width}" height="{self._height}" '
            f'fill="{self._background}" />'
        )
        for element in self._elements:
            lines.append(f"  {element}")
        lines.append("</svg>")
        return "\n".join(lines) + "\n"

    def save_svg(self, path: str | Path) -> Path:
        """SVG として保存する。"""

        _path = Path(path)
        _path.parent.mkdir(parents=True, exist_ok=True)
        with _path.open("w", encoding="utf-8", newline="\n") as f:
            f.write(self.to_svg())
        return _path


__all__ = ["RasterSurface", "Surface", "SvgSurface"]
