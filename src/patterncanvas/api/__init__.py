# どこで: `src/patterncanvas/api/__init__.py`。
# 何を: 公開 API（セッション/設定/生成/登録デコレータ）をまとめる。
# なぜ: 利用者が `patterncanvas.api` だけを import すれば済むようにするため。

from patterncanvas.api.canvas import PatternCanvas
from patterncanvas.core.element import ElementPosition
from patterncanvas.core.generate import generate
from patterncanvas.core.methods.custom import custom_pattern
from patterncanvas.core.presets import SIZE_PRESETS, art_preset, art_preset_names
from patterncanvas.core.settings import DrawingMethodSpec, Settings

__all__ = [
    "DrawingMethodSpec",
    "ElementPosition",
    "PatternCanvas",
    "SIZE_PRESETS",
    "Settings",
    "art_preset",
    "art_preset_names",
    "custom_pattern",
    "generate",
]
