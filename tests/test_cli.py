"""`python -m patterncanvas` CLI に関するテスト群。"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest
from PIL import Image

from patterncanvas.__main__ import main
from patterncanvas.core.runtime_config import set_config_path


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    yield
    set_config_path(None)


def test_methods_lists_defaults(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["methods"]) == 0
    out = capsys.readouterr().out
    assert "grid: columns=5, rows=5, offsetX=0.0, offsetY=0.0" in out
    assert "circle" in out


def test_presets_lists_art_and_size_presets(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["presets"]) == 0
    out = capsys.readouterr().out
    assert "Bubbles: circular / circles / #3498db / count=30" in out
    assert "HD: 1280x720" in out


def test_render_writes_png(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "grid.png"
    code = main(
        [
            "render",
            "--method",
            "grid",
            "--param",
            "columns=2",
            "--param",
            "rows=2",
            "--size",
            "120x80",
            "--seed",
            "3",
            "--out",
            str(out),
            "--quiet",
        ]
    )
    assert code == 0
    assert capsys.readouterr().out.strip() == str(out)
    with Image.open(out) as img:
        assert img.size == (120, 80)


def test_render_preset_to_svg_uses_config_output_dir(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text(
        f'paths:\n  output_dir: "{(tmp_path / "renders").as_posix()}"\n'
        "render:\n  target_duration_ms: 100\n",
        encoding="utf-8",
    )
    code = main(
        [
            "--config",
            str(config),
            "render",
            "--preset",
            "Bubbles",
            "--size-preset",
            "Square",
            "--count",
            "12",
            "--out",
            str(tmp_path / "bubbles.svg"),
            "--quiet",
        ]
    )
    assert code == 0
    root = ET.fromstring((tmp_path / "bubbles.svg").read_text(encoding="utf-8"))
    assert root.attrib["viewBox"] == "0 0 800 800"
    assert len(root.findall("{http://www.w3.org/2000/svg}circle")) == 12


@pytest.mark.parametrize(
    "argv",
    [
        ["render", "--method", "hexagon"],
        ["render", "--size", "big"],
        ["render", "--param", "columns"],
    ],
)
def test_render_rejects_invalid_arguments(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2
