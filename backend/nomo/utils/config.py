# backend/nomo/utils/config.py

"""
環境変数読み取り用のユーティリティ。
Notion 連携・Dispatcher・ログ設定で共通利用する。

NOTE:
  - 環境変数を読むのはアプリケーションの組み立て（nomo.main）側だけ。
    memos / bindings のコア処理はここを直接呼ばない。
"""

import os
from typing import Optional


class EnvVarMissingError(RuntimeError):
    """必須環境変数が設定されていない場合に投げる例外。"""

    def __init__(self, name: str) -> None:
        super().__init__(f"Required environment variable '{name}' is not set.")
        self.name = name


def get_env(
    name: str,
    default: Optional[str] = None,
    *,
    required: bool = True,
) -> str:
    """
    環境変数を取得するヘルパー。

    :param name: 環境変数名
    :param default: デフォルト値（required=False の場合のみ使用）
    :param required: True の場合、未設定なら例外を投げる
    :return: 文字列値
    """
    value = os.getenv(name)

    if value is None or value == "":
        if required:
            raise EnvVarMissingError(name)
        return default

    return value


def get_env_float(name: str, default: float) -> float:
    """
    浮動小数点の環境変数を取得するヘルパー。

    未設定の場合は default を返し、不正な値の場合は RuntimeError にする。
    """
    raw = get_env(name, required=False)
    if raw is None:
        return default

    try:
        value = float(raw)
    except ValueError as exc:  # noqa: TRY003
        raise RuntimeError(
            f"Invalid float value for env var {name}: {raw!r}"
        ) from exc

    if value <= 0:
        raise RuntimeError(f"Env var {name} must be positive: {raw!r}")

    return value
