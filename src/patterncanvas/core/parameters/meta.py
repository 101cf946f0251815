# どこで: `src/patterncanvas/core/parameters/meta.py`。
# 何を: ParamMeta（フォーム表示/値の正規化のためのメタ情報）を提供する。
# なぜ: 描画メソッドごとの型・レンジ・フォーム上のキー名を一元管理するため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ParamMeta:
    """パラメータの UI/正規化用メタ情報。

    ui_min/ui_max はスライダー初期レンジを示すだけで、実値をクランプしない。
    `key` はフォーム側（camelCase）のキー名で、None の場合はフィールド名と同じ。
    """

    kind: str  # "float" | "int" | "str"
    ui_min: Any | None = None
    ui_max: Any | None = None
    key: str | None = None
