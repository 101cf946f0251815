"""
どこで: `src/patterncanvas/core/builtins.py`。
何を: 組み込み描画メソッド/カスタムパターンの登録（registry 初期化）を単一入口へ集約する。
なぜ: import 副作用の分散と手動列挙の重複をなくすため。
"""

from __future__ import annotations

import importlib

_BUILTIN_METHOD_MODULES: tuple[str, ...] = (
    "patterncanvas.core.methods.grid",
    "patterncanvas.core.methods.sine",
    "patterncanvas.core.methods.spiral",
    "patterncanvas.core.methods.circular",
    "patterncanvas.core.methods.fibonacci",
    "patterncanvas.core.methods.lissajous",
    "patterncanvas.core.methods.rose",
    "patterncanvas.core.methods.phyllotaxis",
    "patterncanvas.core.methods.custom",
)

_BUILTIN_METHODS_REGISTERED = False


def ensure_builtin_methods_registered() -> None:
    """組み込みメソッドを registry に登録する（idempotent）。"""

    global _BUILTIN_METHODS_REGISTERED
    if _BUILTIN_METHODS_REGISTERED:
        return
    for module in _BUILTIN_METHOD_MODULES:
        importlib.import_module(module)
    _BUILTIN_METHODS_REGISTERED = True


__all__ = ["ensure_builtin_methods_registered"]
