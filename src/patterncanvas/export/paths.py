"""
どこで: `src/patterncanvas/export/paths.py`。
何を: Settings から PNG/SVG の既定保存パスを決める。
なぜ: CLI とセッションで同じ命名規則を共有するため。
"""

from __future__ import annotations

from pathlib import Path

from patterncanvas.core.runtime_config import output_root_dir
from patterncanvas.core.settings import Settings


def output_stem(settings: Settings) -> str:
    """``{method}-{shape}-{count}-{width}x{height}`` を返す。"""

    return (
        f"{settings.drawing_method.type}-{settings.shape}-{settings.count}-"
        f"{settings.canvas_width}x{settings.canvas_height}"
    )


def default_output_path(settings: Settings, suffix: str) -> Path:
    """既定の保存パス ``{output_root}/{suffix}/{stem}.{suffix}`` を返す。"""

    ext = str(suffix).lower().lstrip(".")
    if ext not in {"png", "svg"}:
        raise ValueError(f"未対応の画像フォーマット: {suffix!r}")
    return output_root_dir() / ext / f"{output_stem(settings)}.{ext}"


__all__ = ["default_output_path", "output_stem"]
