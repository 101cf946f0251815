"""custom メソッド（登録済み callable の実行と検証）に関するテスト群。"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from types import SimpleNamespace

import pytest

from patterncanvas.core.generate import generate
from patterncanvas.core.methods.custom import (
    custom_pattern,
    custom_pattern_registry,
    run_custom_pattern,
)


def _run(func, *, shape: str = "circles", count: int = 10):
    return run_custom_pattern(func, width=400.0, height=300.0, count=count, shape=shape, color="red")


@pytest.fixture
def registered_names() -> Iterator[list[str]]:
    names: list[str] = []
    yield names
    for name in names:
        custom_pattern_registry.unregister(name)


def test_empty_result_yields_no_elements() -> None:
    """空列を返すパターンは要素 0 個。"""
    assert generate(400, 300, 10, "circles", "#000000", custom=lambda w, h, n, c: []) == []


def test_callable_receives_canvas_context() -> None:
    """callable は (width, height, count, color) を受け取る。"""
    seen: list[tuple] = []

    def pattern(width, height, count, color):
        seen.append((width, height, count, color))
        return [{"x": 1, "y": 2, "size": 3}]

    out = generate(400, 300, 7, "circles", "#123456", custom=pattern)
    assert seen == [(400.0, 300.0, 7, "#123456")]
    assert [(e.x, e.y, e.size) for e in out] == [(1.0, 2.0, 3.0)]


def test_raising_pattern_is_logged_and_yields_empty(caplog: pytest.LogCaptureFixture) -> None:
    """callable の例外は外へ出さず、ログに残して空列を返す。"""

    def broken(width, height, count, color):
        raise ZeroDivisionError("boom")

    with caplog.at_level(logging.ERROR):
        assert _run(broken) == []
    assert any("custom pattern" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize("result", [None, 42, "xyz", {"x": 1, "y": 2}])
def test_non_sequence_result_yields_empty(result: object, caplog: pytest.LogCaptureFixture) -> None:
    """要素の列でない戻り値は空列扱い。"""
    with caplog.at_level(logging.WARNING):
        assert _run(lambda w, h, n, c: result) == []
    assert caplog.records


def test_generator_failure_keeps_collected_entries() -> None:
    """列挙途中の例外では、それまでの要素を使う。"""

    def partial(width, height, count, color):
        yield {"x": 1, "y": 1}
        yield {"x": 2, "y": 2}
        raise RuntimeError("stop")

    out = _run(partial)
    assert [(e.x, e.y) for e in out] == [(1.0, 1.0), (2.0, 2.0)]


def test_malformed_entries_are_skipped() -> None:
    """有限の数値 x/y を持たないエントリはスキップする。"""
    entries = [
        {"x": 1, "y": 1},
        {"x": "1", "y": 2},
        {"y": 3},
        None,
        {"x": math.nan, "y": 4},
        {"x": True, "y": 5},
        SimpleNamespace(x=6, y=6, size=2),
    ]
    out = _run(lambda w, h, n, c: entries)
    assert [(e.x, e.y) for e in out] == [(1.0, 1.0), (6.0, 6.0)]
    assert out[1].size == 2.0


def test_zero_or_missing_size_defaults_to_eight() -> None:
    """size が 0 または欠落なら 8。"""
    out = _run(lambda w, h, n, c: [{"x": 0, "y": 0, "size": 0}, {"x": 1, "y": 1}])
    assert [e.size for e in out] == [8.0, 8.0]


def test_lines_connect_to_next_valid_entry_only() -> None:
    """lines では i 番目を戻り値の i+1 番目へ接続し、次が不正なら接続しない。"""
    entries = [
        {"x": 0, "y": 0},
        {"x": 10, "y": 0},
        {"bad": True},
        {"x": 30, "y": 0},
    ]
    out = _run(lambda w, h, n, c: entries, shape="lines")
    assert len(out) == 3
    assert (out[0].end_x, out[0].end_y) == (10.0, 0.0)
    assert not out[1].has_segment
    assert not out[2].has_segment


def test_custom_method_uses_registered_pattern(registered_names: list[str]) -> None:
    """params の pattern 名で登録済みパターンを選ぶ。"""

    @custom_pattern(name="diagonal_for_test")
    def diagonal(width, height, count, color):
        return [{"x": width * i / count, "y": height * i / count} for i in range(count)]

    registered_names.append("diagonal_for_test")
    out = generate(400, 300, 4, "lines", "#000000", "custom", {"pattern": "diagonal_for_test"})
    assert [(e.x, e.y) for e in out] == [(0.0, 0.0), (100.0, 75.0), (200.0, 150.0), (300.0, 225.0)]
    assert [e.has_segment for e in out] == [True, True, True, False]


def test_custom_method_with_unknown_pattern_yields_empty(caplog: pytest.LogCaptureFixture) -> None:
    """未登録のパターン名は空列。"""
    with caplog.at_level(logging.WARNING):
        out = generate(400, 300, 4, "circles", "#000000", "custom", {"pattern": "no_such_pattern"})
    assert out == []
    assert any("no_such_pattern" in r.getMessage() for r in caplog.records)


def test_builtin_circle_pattern() -> None:
    """既定の circle パターンは短辺/3 の円周上に count 個並べる。"""
    out = generate(600, 300, 12, "circles", "#000000", "custom")
    assert len(out) == 12
    for e in out:
        assert math.hypot(e.x - 300.0, e.y - 150.0) == pytest.approx(100.0)
    assert out[0].size == pytest.approx(10.0)


def test_registry_rejects_duplicate_without_overwrite(registered_names: list[str]) -> None:
    """overwrite=False では同名の再登録を拒否する。"""
    custom_pattern(name="dup_for_test")(lambda w, h, n, c: [])
    registered_names.append("dup_for_test")
    with pytest.raises(ValueError):
        custom_pattern(name="dup_for_test", overwrite=False)(lambda w, h, n, c: [])
