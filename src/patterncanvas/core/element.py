# どこで: `src/patterncanvas/core/element.py`。
# 何を: 生成器が返す描画要素 `ElementPosition` を定義する。
# なぜ: 生成（core）と描画（render/runtime）の境界を 1 つの不変値に固定するため。

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ElementPosition:
    """1 個の描画プリミティブ（位置 + サイズ + 任意の線分終点）。

    Notes
    -----
    `end_x/end_y` は shape が ``"lines"`` で、かつ生成器が次点を定義した要素にだけ入る。
    生成パスごとに新しく作られ、描画後は捨てられる。
    """

    x: float
    y: float
    size: float
    end_x: float | None = None
    end_y: float | None = None

    @property
    def has_segment(self) -> bool:
        """線分終点が両方とも定義済みかどうかを返す。"""

        return self.end_x is not None and self.end_y is not None


__all__ = ["ElementPosition"]
