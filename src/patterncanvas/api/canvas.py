"""
どこで: `src/patterncanvas/api/canvas.py`。
何を: Settings を受け取り「生成 → インクリメンタル描画 → 書き出し」を配線するセッションを提供する。
なぜ: フォームや CLI が core/runtime の詳細を知らずに、設定変更ごとの再描画と書き出しを行えるようにするため。
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from patterncanvas.core.element import ElementPosition
from patterncanvas.core.generate import generate
from patterncanvas.core.runtime_config import RuntimeConfig, runtime_config
from patterncanvas.core.settings import Settings
from patterncanvas.export.paths import default_output_path
from patterncanvas.render.primitives import draw_element
from patterncanvas.render.surface import RasterSurface, Surface, SvgSurface
from patterncanvas.runtime.scheduler import (
    CompleteCallback,
    IncrementalScheduler,
    PassState,
    ProgressCallback,
    RenderPass,
)
from patterncanvas.runtime.ticker import PygletTicker, Ticker

_logger = logging.getLogger(__name__)


class PatternCanvas:
    """1 枚のサーフェスへ Settings ごとのパスを描くセッション。

    Notes
    -----
    `render()` を呼ぶたびに実行中のパスを取り消し、サーフェスを作り直してから新しいパスを始める。
    """

    def __init__(
        self,
        surface: Surface | None = None,
        *,
        ticker: Ticker | None = None,
        config: RuntimeConfig | None = None,
    ) -> None:
        self._config = config if config is not None else runtime_config()
        self._surface: Surface = (
            surface
            if surface is not None
            else RasterSurface(0, 0, background=self._config.background_color)
        )
        self._ticker: Ticker = (
            ticker if ticker is not None else PygletTicker(fps=self._config.target_fps)
        )
        self._scheduler = IncrementalScheduler.from_config(
            self._surface, self._ticker, config=self._config
        )
        self._settings: Settings | None = None
        self._elements: tuple[ElementPosition, ...] = ()

    @property
    def surface(self) -> Surface:
        return self._surface

    @property
    def ticker(self) -> Ticker:
        return self._ticker

    @property
    def scheduler(self) -> IncrementalScheduler:
        return self._scheduler

    @property
    def settings(self) -> Settings | None:
        """最後に描画を始めた Settings を返す。"""

        return self._settings

    @property
    def elements(self) -> tuple[ElementPosition, ...]:
        """最後に生成した要素列を返す。"""

        return self._elements

    @property
    def progress(self) -> int:
        return self._scheduler.progress

    @property
    def is_drawing(self) -> bool:
        return self._scheduler.is_drawing

    def _prepare_surface(self, settings: Settings) -> None:
        surface = self._surface
        resize = getattr(surface, "resize", None)
        if callable(resize):
            resize(settings.canvas_width, settings.canvas_height)
            return
        if (surface.width, surface.height) != settings.canvas_size:
            _logger.warning(
                "サーフェス寸法 %sx%s が canvas_size %s と一致しません",
                surface.width,
                surface.height,
                settings.canvas_size,
            )
        surface.clear()

    def render(
        self,
        settings: Settings,
        *,
        on_progress: ProgressCallback | None = None,
        on_complete: CompleteCallback | None = None,
    ) -> RenderPass:
        """Settings で新しい描画パスを開始する。

        Parameters
        ----------
        settings : Settings
            このパスの入力スナップショット。
        on_progress, on_complete : callable or None, optional
            `IncrementalScheduler.start()` へそのまま渡す。

        Returns
        -------
        RenderPass
            開始したパス。
        """

        self._scheduler.cancel()
        self._prepare_surface(settings)

        rng = np.random.default_rng(settings.seed)
        elements = generate(
            settings.canvas_width,
            settings.canvas_height,
            settings.count,
            settings.shape,
            settings.color,
            settings.drawing_method.type,
            settings.method_params,
            rng=rng,
        )
        self._settings = settings
        self._elements = tuple(elements)
        return self._scheduler.start(
            self._elements,
            settings.shape,
            settings.color,
            on_progress=on_progress,
            on_complete=on_complete,
        )

    def _require_finished(self) -> Settings:
        if self._settings is None:
            raise RuntimeError("まだ描画していません（render() を先に呼んでください）")
        if self.is_drawing:
            raise RuntimeError("描画中のため書き出せません（完了を待ってください）")
        if self._scheduler.state is not PassState.COMPLETED:
            raise RuntimeError("最後のパスが完了していないため書き出せません（取り消し済み）")
        return self._settings

    def export_png(self, path: str | Path | None = None) -> Path:
        """描画済みサーフェスを PNG として保存する。

        Raises
        ------
        RuntimeError
            未描画・描画中、または最後のパスが取り消された場合。
        TypeError
            サーフェスが PNG 保存に対応していない場合。
        """

        settings = self._require_finished()
        save_png = getattr(self._surface, "save_png", None)
        if not callable(save_png):
            raise TypeError(f"PNG 保存に未対応のサーフェスです: {type(self._surface).__name__}")
        out = Path(path) if path is not None else default_output_path(settings, "png")
        return save_png(out)

    def export_svg(self, path: str | Path | None = None) -> Path:
        """最後のパスの要素列を SVG として保存する。

        Notes
        -----
        描画済みの要素列をそのまま SVG サーフェスへ同期描画するため、乱数を含むメソッドでも
        画面と同じ配置になる。
        """

        settings = self._require_finished()
        svg = SvgSurface(
            settings.canvas_width,
            settings.canvas_height,
            background=self._config.background_color,
        )
        for element in self._elements:
            draw_element(svg, element, settings.shape, settings.color)
        out = Path(path) if path is not None else default_output_path(settings, "svg")
        return svg.save_svg(out)

    def close(self) -> None:
        """実行中のパスを取り消す。"""

        self._scheduler.close()


__all__ = ["PatternCanvas"]
