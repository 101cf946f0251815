"""ラスタ/SVG サーフェスに関するテスト群。"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest
from PIL import Image

from patterncanvas.render.surface import RasterSurface, SvgSurface

_SVG_NS = "http://www.w3.org/2000/svg"
_NS = {"svg": _SVG_NS}

WHITE = (255, 255, 255)


def test_raster_fill_circle_and_background() -> None:
    s = RasterSurface(20, 20, background="#ffffff")
    s.fill_circle(10, 10, 5, "#ff0000")
    assert s.pixel(10, 10) == (255, 0, 0)
    assert s.pixel(0, 0) == WHITE


def test_raster_fill_rect_and_stroke_line() -> None:
    s = RasterSurface(20, 20)
    s.fill_rect(2, 2, 4, 4, "blue")
    s.stroke_line(0, 15, 19, 15, 3, "#00ff00")
    assert s.pixel(3, 3) == (0, 0, 255)
    assert s.pixel(10, 15) == (0, 255, 0)
    assert s.pixel(10, 5) == WHITE


def test_raster_skips_degenerate_primitives() -> None:
    s = RasterSurface(10, 10)
    s.fill_circle(5, 5, 0, "black")
    s.fill_circle(5, 5, -3, "black")
    s.fill_rect(5, 5, 0, 4, "black")
    s.fill_circle(float("nan"), 5, 3, "black")
    assert s.pixel(5, 5) == WHITE


def test_raster_clear_and_resize() -> None:
    s = RasterSurface(10, 10, background="black")
    s.fill_rect(0, 0, 10, 10, "white")
    s.clear()
    assert s.pixel(5, 5) == (0, 0, 0)

    s.resize(30, 12)
    assert (s.width, s.height) == (30, 12)
    assert s.pixel(29, 11) == (0, 0, 0)
    with pytest.raises(ValueError):
        s.resize(-1, 10)


def test_raster_save_png(tmp_path: Path) -> None:
    s = RasterSurface(16, 8)
    out = s.save_png(tmp_path / "nested" / "a.png")
    assert out.is_file()
    with Image.open(out) as img:
        assert img.size == (16, 8)


def test_svg_records_primitives() -> None:
    s = SvgSurface(100, 50, background="#ffffff")
    s.fill_circle(1.23456, 2, 3, "red")
    s.fill_rect(10, 10, 5, 5, "#00ff00")
    s.stroke_line(0, 0, 10, -0.0001, 2, "blue")
    assert s.elements == (
        '<circle cx="1.235" cy="2.000" r="3.000" fill="#FF0000" />',
        '<rect x="10.000" y="10.000" width="5.000" height="5.000" fill="#00FF00" />',
        '<line x1="0.000" y1="0.000" x2="10.000" y2="0.000" stroke="#0000FF" stroke-width="2.000" />',
    )


def test_svg_document_is_well_formed(tmp_path: Path) -> None:
    s = SvgSurface(100, 50, background="black")
    s.fill_circle(50, 25, 10, "white")
    s.fill_circle(50, 25, 0, "white")

    path = s.save_svg(tmp_path / "out.svg")
    root = ET.fromstring(path.read_text(encoding="utf-8"))
    assert root.tag == f"{{{_SVG_NS}}}svg"
    assert root.attrib["viewBox"] == "0 0 100 50"
    background = root.findall("svg:rect", _NS)
    assert len(background) == 1
    assert background[0].attrib["fill"] == "#000000"
    assert len(root.findall("svg:circle", _NS)) == 1

    s.clear()
    assert s.elements == ()
