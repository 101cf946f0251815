"""grid メソッドの配置と接続に関するテスト群。"""

from __future__ import annotations

import numpy as np
import pytest

from patterncanvas.core.generate import generate


def test_grid_places_cell_centers_row_major() -> None:
    """800x600, 4x2 はセル幅 160・セル高 200 の行優先配置になる。"""
    out = generate(
        800, 600, 100, "circles", "#000000", "grid", {"columns": 4, "rows": 2},
        rng=np.random.default_rng(0),
    )
    assert len(out) == 8
    assert [e.x for e in out] == pytest.approx([160, 320, 480, 640] * 2)
    assert [e.y for e in out] == pytest.approx([200.0] * 4 + [400.0] * 4)
    for e in out:
        assert 10.0 <= e.size < 20.0


def test_grid_lines_connect_only_within_row() -> None:
    """lines は同じ行の右隣へだけ接続し、各行 columns-1 本になる。"""
    out = generate(
        800, 600, 100, "lines", "#000000", "grid", {"columns": 4, "rows": 2},
        rng=np.random.default_rng(0),
    )
    for row in (out[:4], out[4:]):
        assert [e.has_segment for e in row] == [True, True, True, False]
        for e in row[:3]:
            assert e.end_x == pytest.approx(e.x + 160.0)
            assert e.end_y == pytest.approx(e.y)


def test_grid_applies_offsets() -> None:
    """offsetX/offsetY が全要素に加算される。"""
    base = generate(
        800, 600, 1, "circles", "#000000", "grid", {"columns": 2, "rows": 2},
        rng=np.random.default_rng(0),
    )
    moved = generate(
        800, 600, 1, "circles", "#000000", "grid",
        {"columns": 2, "rows": 2, "offsetX": 15, "offsetY": -5},
        rng=np.random.default_rng(0),
    )
    for a, b in zip(base, moved):
        assert b.x == pytest.approx(a.x + 15.0)
        assert b.y == pytest.approx(a.y - 5.0)


def test_grid_ignores_count() -> None:
    """count が 0 でも columns x rows 個を返す。"""
    out = generate(800, 600, 0, "circles", "#000000", "grid", {"columns": 3, "rows": 3})
    assert len(out) == 9


def test_grid_invalid_dimensions_fall_back_to_defaults() -> None:
    """1 未満の columns/rows は既定値 5 に戻る。"""
    out = generate(800, 600, 10, "circles", "#000000", "grid", {"columns": 0, "rows": -3})
    assert len(out) == 25
