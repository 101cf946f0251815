"""
どこで: `src/patterncanvas/core/methods/util.py`。
何を: 描画メソッド実装で共有する小さな配列ユーティリティを提供する。
なぜ: 「サンプル配列 → ElementPosition 列」と線分接続の組み立てを各メソッドで重複させないため。
"""

from __future__ import annotations

import numpy as np

from patterncanvas.core.element import ElementPosition

LINES = "lines"


def sample_indices(n: int) -> np.ndarray:
    """0..n-1 の float64 インデックス配列を返す。"""

    return np.arange(int(n), dtype=np.float64)


def elements_from_arrays(
    x: np.ndarray,
    y: np.ndarray,
    size: np.ndarray | float,
    *,
    end_x: np.ndarray | None = None,
    end_y: np.ndarray | None = None,
    connected: np.ndarray | None = None,
) -> list[ElementPosition]:
    """座標/サイズ配列から ElementPosition 列を組み立てる。

    Parameters
    ----------
    x, y : np.ndarray
        shape (N,) の要素中心座標。
    size : np.ndarray or float
        shape (N,) のサイズ、またはスカラー。
    end_x, end_y : np.ndarray or None, optional
        shape (N,) の線分終点。None の場合は終点なし。
    connected : np.ndarray or None, optional
        shape (N,) の bool。False の要素には終点を入れない。None は全要素 True。

    Returns
    -------
    list[ElementPosition]
        生成順の要素列。
    """

    n = int(x.shape[0])
    xs = x.tolist()
    ys = y.tolist()
    sizes = np.broadcast_to(np.asarray(size, dtype=np.float64), (n,)).tolist()

    if end_x is None or end_y is None:
        return [ElementPosition(x=xs[i], y=ys[i], size=sizes[i]) for i in range(n)]

    exs = end_x.tolist()
    eys = end_y.tolist()
    flags = [True] * n if connected is None else connected.tolist()
    out: list[ElementPosition] = []
    for i in range(n):
        if flags[i]:
            out.append(
                ElementPosition(x=xs[i], y=ys[i], size=sizes[i], end_x=exs[i], end_y=eys[i])
            )
        else:
            out.append(ElementPosition(x=xs[i], y=ys[i], size=sizes[i]))
    return out


def open_path_mask(n: int) -> np.ndarray:
    """最後の要素だけ False の bool 配列（開いた曲線の接続）を返す。"""

    mask = np.ones((int(n),), dtype=bool)
    if n > 0:
        mask[-1] = False
    return mask


__all__ = ["LINES", "elements_from_arrays", "open_path_mask", "sample_indices"]
