# どこで: `src/patterncanvas/__main__.py`。
# 何を: `python -m patterncanvas ...` の CLI エントリポイントを提供する。
# なぜ: フォーム UI なしでも設定 → インクリメンタル描画 → PNG/SVG 書き出しを 1 コマンドで行えるようにするため。

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from patterncanvas.api.canvas import PatternCanvas
from patterncanvas.core.builtins import ensure_builtin_methods_registered
from patterncanvas.core.method_registry import method_registry
from patterncanvas.core.methods.custom import custom_pattern_registry
from patterncanvas.core.presets import SIZE_PRESETS, art_preset, art_preset_names, size_preset
from patterncanvas.core.runtime_config import runtime_config, set_config_path
from patterncanvas.core.settings import SHAPES, DrawingMethodSpec, Settings, clamp_canvas_size
from patterncanvas.runtime.ticker import PygletTicker


def _parse_size(text: str) -> tuple[int, int]:
    try:
        w_text, h_text = text.lower().split("x", 1)
        return clamp_canvas_size(w_text), clamp_canvas_size(h_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"--size は WIDTHxHEIGHT 形式: got={text!r}") from exc


def _parse_param(text: str) -> tuple[str, str]:
    key, sep, value = text.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"--param は KEY=VALUE 形式: got={text!r}")
    return key.strip(), value.strip()


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="python -m patterncanvas")
    p.add_argument("--config", default=None, help="config.yaml のパス")
    p.add_argument("--log-level", default="WARNING", help="logging レベル（DEBUG/INFO/...）")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("render", help="パターンを描画して PNG/SVG に書き出す")
    r.add_argument("--preset", default=None, choices=art_preset_names(), help="アートプリセット名")
    r.add_argument("--method", default=None, choices=sorted(method_registry.names()))
    r.add_argument("--shape", default=None, choices=SHAPES)
    r.add_argument("--color", default=None)
    r.add_argument("--count", type=int, default=None)
    r.add_argument("--size", type=_parse_size, default=None, help="WIDTHxHEIGHT（50..5000）")
    r.add_argument("--size-preset", default=None, choices=tuple(SIZE_PRESETS.keys()))
    r.add_argument(
        "--param",
        type=_parse_param,
        action="append",
        default=[],
        help="メソッドのパラメータ KEY=VALUE（複数可）",
    )
    r.add_argument("--scale-to-canvas", action="store_true", help="距離系パラメータを事前スケールする")
    r.add_argument("--seed", type=int, default=None)
    r.add_argument("--out", default=None, help="出力パス（.png / .svg）")
    r.add_argument("--quiet", action="store_true", help="進捗を表示しない")

    sub.add_parser("methods", help="描画メソッドと既定パラメータを一覧表示する")
    sub.add_parser("presets", help="アート/サイズプリセットを一覧表示する")
    return p


def _settings_from_args(args: argparse.Namespace) -> Settings:
    base = art_preset(args.preset) if args.preset else Settings()

    method_type = args.method or base.drawing_method.type
    params: dict[str, Any] = {}
    if method_type == base.drawing_method.type:
        params.update(base.drawing_method.params)
    params.update(dict(args.param))

    size = base.canvas_size
    if args.size_preset:
        size = size_preset(args.size_preset)
    if args.size is not None:
        size = args.size

    return Settings(
        shape=args.shape or base.shape,
        color=args.color or base.color,
        count=base.count if args.count is None else int(args.count),
        canvas_width=size[0],
        canvas_height=size[1],
        drawing_method=DrawingMethodSpec(type=method_type, params=params),
        scale_to_canvas=bool(args.scale_to_canvas),
        seed=args.seed,
    )


def _cmd_render(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    ticker = PygletTicker(fps=runtime_config().target_fps)
    canvas = PatternCanvas(ticker=ticker)

    def on_progress(progress: int) -> None:
        if not args.quiet:
            print(f"\rDrawing... {progress}%", end="", file=sys.stderr, flush=True)

    canvas.render(settings, on_progress=on_progress)
    try:
        finished = ticker.run_until(lambda: not canvas.is_drawing)
    finally:
        canvas.close()
    if not args.quiet:
        print(file=sys.stderr)
    if not finished:
        print("描画が完了しませんでした", file=sys.stderr)
        return 1

    out = args.out
    if out is not None and str(out).lower().endswith(".svg"):
        path = canvas.export_svg(out)
    else:
        path = canvas.export_png(out)
    print(path)
    return 0


def _cmd_methods() -> int:
    for name in method_registry.names():
        defaults = method_registry.get_defaults(name)
        text = ", ".join(f"{k}={v!r}" for k, v in defaults.items())
        print(f"{name}: {text}")
    patterns = ", ".join(sorted(name for name, _ in custom_pattern_registry.items()))
    print(f"  custom patterns: {patterns}")
    return 0


def _cmd_presets() -> int:
    print("art presets:")
    for name in art_preset_names():
        s = art_preset(name)
        print(f"  {name}: {s.drawing_method.type} / {s.shape} / {s.color} / count={s.count}")
    print("size presets:")
    for name, (w, h) in SIZE_PRESETS.items():
        print(f"  {name}: {w}x{h}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    ensure_builtin_methods_registered()
    args = _build_parser().parse_args(argv)

    logging.basicConfig(level=str(args.log_level).upper())
    if args.config is not None:
        set_config_path(args.config)

    if args.cmd == "render":
        return _cmd_render(args)
    if args.cmd == "methods":
        return _cmd_methods()
    if args.cmd == "presets":
        return _cmd_presets()

    raise AssertionError(f"unknown cmd: {args.cmd!r}")


if __name__ == "__main__":
    raise SystemExit(main())
