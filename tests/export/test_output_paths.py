from __future__ import annotations

from pathlib import Path

import pytest

from patterncanvas.core.runtime_config import set_config_path
from patterncanvas.core.settings import DrawingMethodSpec, Settings
from patterncanvas.export.paths import default_output_path, output_stem


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    yield
    set_config_path(None)


def test_output_stem() -> None:
    s = Settings(
        shape="lines",
        count=70,
        canvas_width=1280,
        canvas_height=720,
        drawing_method=DrawingMethodSpec(type="rose"),
    )
    assert output_stem(s) == "rose-lines-70-1280x720"


@pytest.mark.parametrize("suffix", ["png", ".PNG", "svg"])
def test_default_output_path(suffix: str) -> None:
    ext = suffix.lower().lstrip(".")
    out = default_output_path(Settings(), suffix)
    assert out == Path("data") / "output" / ext / f"spiral-circles-100-800x600.{ext}"


def test_default_output_path_rejects_unknown_suffix() -> None:
    with pytest.raises(ValueError):
        default_output_path(Settings(), "jpg")
