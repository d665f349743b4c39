# backend/nomo/memos/config.py

"""
Dispatcher の設定値。

Dispatcher 自身は環境変数を読まない。
get_dispatcher_settings() の結果をアプリ組み立て時にコンストラクタへ渡す。
"""

from dataclasses import dataclass
from functools import lru_cache

from nomo.utils.config import get_env_float


@dataclass(frozen=True)
class DispatcherSettings:
    """
    Dispatch 処理に関する設定値。

    lookup_timeout_seconds: Binding 参照 1 回あたりの上限秒数
    submit_timeout_seconds: Notion へのページ作成 1 回あたりの上限秒数
    """

    lookup_timeout_seconds: float = 5.0
    submit_timeout_seconds: float = 10.0


@lru_cache()
def get_dispatcher_settings() -> DispatcherSettings:
    """
    環境変数から Dispatcher 設定を読み込む。

    任意:
      - NOMO_LOOKUP_TIMEOUT_SECONDS（デフォルト 5秒）
      - NOMO_SUBMIT_TIMEOUT_SECONDS（デフォルト 10秒）
    """
    return DispatcherSettings(
        lookup_timeout_seconds=get_env_float("NOMO_LOOKUP_TIMEOUT_SECONDS", default=5.0),
        submit_timeout_seconds=get_env_float("NOMO_SUBMIT_TIMEOUT_SECONDS", default=10.0),
    )
