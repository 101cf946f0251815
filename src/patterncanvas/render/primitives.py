# どこで: `src/patterncanvas/render/primitives.py`。
# 何を: 1 個の ElementPosition を shape（circles/rectangles/lines）に従ってサーフェスへ描く。
# なぜ: スケジューラが要素ごとに呼ぶ最小の描画単位を 1 箇所に固定するため。

from __future__ import annotations

from patterncanvas.core.element import ElementPosition
from patterncanvas.render.surface import Surface


def draw_circle(surface: Surface, element: ElementPosition, color: str) -> None:
    """中心 (x, y)・半径 size の塗り円を描く。"""

    surface.fill_circle(element.x, element.y, element.size, color)


def draw_rectangle(surface: Surface, element: ElementPosition, color: str) -> None:
    """中心 (x, y)・一辺 size の塗り正方形を描く。"""

    half = element.size / 2.0
    surface.fill_rect(element.x - half, element.y - half, element.size, element.size, color)


def draw_line(surface: Surface, element: ElementPosition, color: str) -> None:
    """(x, y) -> (end_x, end_y) を線幅 size/3 で描く。終点が無ければ何もしない。"""

    if element.end_x is None or element.end_y is None:
        return
    surface.stroke_line(
        element.x, element.y, element.end_x, element.end_y, element.size / 3.0, color
    )


_DRAWERS = {
    "circles": draw_circle,
    "rectangles": draw_rectangle,
    "lines": draw_line,
}


def draw_element(surface: Surface, element: ElementPosition, shape: str, color: str) -> None:
    """shape に対応するプリミティブで要素を描く。

    Raises
    ------
    ValueError
        未知の shape の場合。
    """

    try:
        drawer = _DRAWERS[shape]
    except KeyError as exc:
        raise ValueError(f"未知の shape です: {shape!r}") from exc
    drawer(surface, element, color)


__all__ = ["draw_circle", "draw_element", "draw_line", "draw_rectangle"]
