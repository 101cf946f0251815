# どこで: `src/patterncanvas/__init__.py`。
# 何を: ルート `patterncanvas` パッケージを定義する。
# なぜ: import 起点を `patterncanvas` に統一するため。

from __future__ import annotations

from patterncanvas.api import (
    DrawingMethodSpec,
    ElementPosition,
    PatternCanvas,
    Settings,
    custom_pattern,
    generate,
)

__all__ = [
    "DrawingMethodSpec",
    "ElementPosition",
    "PatternCanvas",
    "Settings",
    "custom_pattern",
    "generate",
]
