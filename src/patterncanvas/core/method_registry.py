# どこで: `src/patterncanvas/core/method_registry.py`。
# 何を: 描画メソッド名（grid/sine/...）から要素列の生成関数を引くレジストリを提供する。
# なぜ: `generate()` の分岐を登録テーブルに寄せ、メソッドごとの既定値/メタを 1 箇所で引けるようにするため。

from __future__ import annotations

import inspect
from collections.abc import ItemsView, Mapping
from dataclasses import fields
from typing import Any, Callable

import numpy as np

from patterncanvas.core.element import ElementPosition
from patterncanvas.core.parameters import ParamMeta, coerce_params, params_to_form

MethodFunc = Callable[..., list[ElementPosition]]

_CONTEXT_ARGS = ("width", "height", "count", "shape", "color", "params", "rng")


class MethodRegistry:
    """描画メソッド名と生成関数を対応付けるレジストリ。

    Notes
    -----
    登録された関数は ``wrapper(*, width, height, count, shape, color, params, rng)`` として呼べる。
    元関数のシグネチャに無い引数（例: grid 以外の rng、custom 以外の color）は渡さない。
    """

    def __init__(self) -> None:
        """空のレジストリを初期化する。"""
        self._items: dict[str, MethodFunc] = {}
        self._params: dict[str, type] = {}

    def _register(
        self,
        name: str,
        func: MethodFunc,
        *,
        params: type,
        overwrite: bool = True,
    ) -> None:
        """メソッドを登録する（内部用）。

        Notes
        -----
        登録は `@method` デコレータ経由に統一する。
        """
        if not overwrite and name in self._items:
            raise ValueError(f"method '{name}' は既に登録されている")
        self._items[name] = func
        self._params[name] = params

    def get(self, name: str) -> MethodFunc:
        """メソッド名に対応する生成関数を取得する。

        Raises
        ------
        KeyError
            未登録のメソッド名が指定された場合。
        """
        return self._items[name]

    def __contains__(self, name: object) -> bool:
        """指定された名前が登録済みかどうかを返す。"""
        return name in self._items

    def __getitem__(self, name: str) -> MethodFunc:
        """辞書風に生成関数を取得するショートカット。"""
        return self.get(name)

    def items(self) -> ItemsView[str, MethodFunc]:
        """登録済みエントリの (name, func) ビューを返す。"""
        return self._items.items()

    def names(self) -> tuple[str, ...]:
        """登録順のメソッド名を返す。"""
        return tuple(self._items.keys())

    def get_params_type(self, name: str) -> type:
        """メソッド名に対応するパラメータ構造体の型を返す。"""
        return self._params[name]

    def coerce(self, name: str, params: Mapping[str, object] | object | None) -> Any:
        """params をメソッドのパラメータ構造体へ正規化して返す。"""
        return coerce_params(self._params[name], params)

    def get_defaults(self, name: str) -> dict[str, Any]:
        """フォームのキー名で既定パラメータ dict を返す。"""
        return params_to_form(self._params[name]())

    def get_meta(self, name: str) -> dict[str, ParamMeta]:
        """フォームのキー名で ParamMeta 辞書を返す。"""
        out: dict[str, ParamMeta] = {}
        for f in fields(self._params[name]):
            meta = f.metadata.get("meta")
            if isinstance(meta, ParamMeta):
                out[meta.key or f.name] = meta
        return out


method_registry = MethodRegistry()
"""グローバルな描画メソッドレジストリインスタンス。"""


def method(
    func: MethodFunc | None = None,
    *,
    params: type,
    name: str | None = None,
    overwrite: bool = True,
):
    """グローバル method レジストリ用デコレータ。

    既定では関数名をそのままメソッド名として登録する。

    Parameters
    ----------
    func : Callable or None, optional
        デコレート対象の関数。キーワード専用引数で
        width/height/count/shape/params（必要なら color/rng）を受け取る。
    params : type
        メソッドのパラメータ構造体（frozen dataclass）。
    name : str or None, optional
        登録名。None の場合は関数名。
    overwrite : bool, optional
        既存エントリがある場合に上書きするかどうか。

    Examples
    --------
    @method(params=SineParams)
    def sine(*, width, height, count, shape, params):
        ...
        return elements
    """

    def decorator(f: MethodFunc) -> MethodFunc:
        sig = inspect.signature(f)
        unknown = [p for p in sig.parameters if p not in _CONTEXT_ARGS]
        if unknown:
            raise ValueError(f"method '{f.__name__}' に未対応の引数があります: {unknown!r}")
        accepted = tuple(p for p in _CONTEXT_ARGS if p in sig.parameters)

        def wrapper(
            *,
            width: float,
            height: float,
            count: int,
            shape: str,
            color: str,
            params: Any,
            rng: np.random.Generator,
        ) -> list[ElementPosition]:
            context = {
                "width": width,
                "height": height,
                "count": count,
                "shape": shape,
                "color": color,
                "params": params,
                "rng": rng,
            }
            return f(**{k: context[k] for k in accepted})

        method_registry._register(
            name or f.__name__,
            wrapper,
            params=params,
            overwrite=overwrite,
        )
        return f

    if func is None:
        return decorator
    return decorator(func)


__all__ = ["MethodFunc", "MethodRegistry", "method", "method_registry"]
