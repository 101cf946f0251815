# どこで: `src/patterncanvas/core/parameters/__init__.py`。
# 何を: メソッド別パラメータ構造体と正規化関数の公開エイリアスをまとめる。
# なぜ: 生成器・設定・CLI から最小インポートで使えるようにするため。

from .coerce import coerce_params, param_field, params_to_form
from .meta import ParamMeta

__all__ = ["ParamMeta", "coerce_params", "param_field", "params_to_form"]
