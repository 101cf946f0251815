# どこで: `src/patterncanvas/core/parameters/coerce.py`。
# 何を: フォーム由来の params（str -> number|str）をメソッド別の型付き構造体へ正規化する。
# なぜ: 「欠落/不正値は既定値」を呼び出しごとの `get(..., default)` ではなく、設定構築時の 1 回に寄せるため。

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import MISSING, field, fields, is_dataclass
from numbers import Real
from typing import Any, TypeVar

from .meta import ParamMeta

T = TypeVar("T")


def param_field(
    default: Any,
    *,
    kind: str,
    ui_min: Any | None = None,
    ui_max: Any | None = None,
    key: str | None = None,
) -> Any:
    """ParamMeta 付きの dataclass field を返す。"""

    meta = ParamMeta(kind=str(kind), ui_min=ui_min, ui_max=ui_max, key=key)
    return field(default=default, metadata={"meta": meta})


def _field_meta(f: Any) -> ParamMeta:
    meta = f.metadata.get("meta")
    if isinstance(meta, ParamMeta):
        return meta
    return ParamMeta(kind="float")


def _as_finite_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Real):
        out = float(value)
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            out = float(s)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(out):
        return None
    return out


def coerce_value(value: object, *, kind: str, default: Any) -> Any:
    """1 つの値を kind に従って正規化する。変換できない場合は default を返す。"""

    if kind == "str":
        if value is None:
            return default
        s = str(value).strip()
        return s if s else default

    f = _as_finite_float(value)
    if f is None:
        return default
    if kind == "int":
        return int(f)
    return f


def _lookup(params: Mapping[str, object], name: str, key: str | None) -> object:
    if name in params:
        return params[name]
    if key is not None and key in params:
        return params[key]
    return None


def coerce_params(cls: type[T], params: Mapping[str, object] | T | None) -> T:
    """params をメソッド別パラメータ構造体 `cls` に正規化して返す。

    Parameters
    ----------
    cls : type
        frozen dataclass（各 field は `param_field()` で既定値と ParamMeta を持つ）。
    params : Mapping[str, object] or cls or None
        フォーム由来の params。snake_case のフィールド名と ParamMeta.key（camelCase）の両方を受け付ける。

    Returns
    -------
    cls
        全フィールドが埋まった構造体。`normalized()` を持つ場合はその結果。

    Notes
    -----
    欠落・非数値・非有限の値は例外にせず既定値へ置き換える。未知キーは無視する。
    """

    if not is_dataclass(cls):
        raise TypeError(f"パラメータ構造体は dataclass である必要があります: {cls!r}")
    if isinstance(params, cls):
        return params
    if params is None:
        params = {}
    if not isinstance(params, Mapping):
        raise TypeError(f"params は mapping である必要があります: got={params!r}")

    values: dict[str, Any] = {}
    for f in fields(cls):
        if f.default is MISSING:
            raise TypeError(f"{cls.__name__}.{f.name} に既定値がありません")
        meta = _field_meta(f)
        raw = _lookup(params, f.name, meta.key)
        values[f.name] = coerce_value(raw, kind=meta.kind, default=f.default)

    out = cls(**values)
    normalized = getattr(out, "normalized", None)
    if callable(normalized):
        out = normalized()
    return out


def params_to_form(params: object) -> dict[str, Any]:
    """構造体をフォーム側のキー名（ParamMeta.key 優先）の dict に変換して返す。"""

    if not is_dataclass(params) or isinstance(params, type):
        raise TypeError(f"params はパラメータ構造体である必要があります: got={params!r}")
    out: dict[str, Any] = {}
    for f in fields(params):
        meta = _field_meta(f)
        out[meta.key or f.name] = getattr(params, f.name)
    return out


__all__ = ["param_field", "coerce_value", "coerce_params", "params_to_form"]
