"""`generate()` の入口での退化入力とディスパッチに関するテスト群。"""

from __future__ import annotations

import logging
import math

import pytest

from patterncanvas.core.generate import DEFAULT_METHOD, generate


@pytest.mark.parametrize(
    ("width", "height"),
    [(0, 600), (800, 0), (-10, 600), (math.inf, 600), (800, math.nan)],
)
@pytest.mark.parametrize("method_type", ["grid", "sine", "circular", "custom"])
def test_degenerate_extent_yields_empty(width: float, height: float, method_type: str) -> None:
    """0 以下・非有限のキャンバス寸法では全メソッドが空列を返す。"""
    assert generate(width, height, 10, "circles", "#000000", method_type) == []


@pytest.mark.parametrize("method_type", ["sine", "spiral", "circular", "rose", "custom"])
@pytest.mark.parametrize("count", [0, -5])
def test_non_positive_count_yields_empty(method_type: str, count: int) -> None:
    assert generate(800, 600, count, "lines", "#000000", method_type) == []


def test_custom_callable_with_zero_count_is_not_called() -> None:
    calls: list[int] = []

    def pattern(width, height, count, color):
        calls.append(count)
        return []

    assert generate(800, 600, 0, "circles", "#000000", custom=pattern) == []
    assert calls == []


def test_unknown_method_is_logged_and_yields_empty(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        assert generate(800, 600, 10, "circles", "#000000", "hexagon") == []
    assert any("hexagon" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize("method_type", [None, ""])
def test_missing_method_falls_back_to_default(method_type: str | None) -> None:
    assert DEFAULT_METHOD == "spiral"
    a = generate(800, 600, 10, "circles", "#000000", method_type)
    b = generate(800, 600, 10, "circles", "#000000", "spiral")
    assert a == b


def test_circular_four_points_close_the_loop() -> None:
    """400x400, radius 100 の 4 点は中心 (200, 200) の正方形に並び、最後は先頭へ戻る。"""
    out = generate(400, 400, 4, "lines", "#000000", "circular", {"radius": 100})
    expected = [(300.0, 200.0), (200.0, 300.0), (100.0, 200.0), (200.0, 100.0)]
    for e, (x, y) in zip(out, expected):
        assert e.x == pytest.approx(x)
        assert e.y == pytest.approx(y)
    assert out[-1].end_x == pytest.approx(300.0)
    assert out[-1].end_y == pytest.approx(200.0)


def test_circular_without_variation_uses_fixed_size() -> None:
    out = generate(1280, 720, 6, "circles", "#000000", "circular")
    assert all(e.size == pytest.approx(8.0) for e in out)


def test_circular_variation_stays_within_bounds() -> None:
    out = generate(1280, 720, 200, "circles", "#000000", "circular", {"radius": 100, "radiusVariation": 20})
    for e in out:
        r = math.hypot(e.x - 640.0, e.y - 360.0)
        assert 80.0 - 1e-9 <= r <= 120.0 + 1e-9
        assert 8.0 <= e.size <= 16.0
