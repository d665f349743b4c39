# backend/nomo/utils/logging_config.py

"""
アプリ全体のログ出力設定。

- 標準出力へのストリームハンドラを常に設定
- NOMO_LOG_FILE が設定されていればローテーション付きのファイル出力も追加

各モジュールは logging.getLogger(__name__) を使うだけでよい。
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import get_env

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# ファイルローテーション設定（64MiB x 10 世代）
LOG_FILE_MAX_BYTES = 64 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 10


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    nomo パッケージのロガーにハンドラを設定して返す。

    引数が None の場合は環境変数から読む:
      - NOMO_LOG_LEVEL (デフォルト: INFO)
      - NOMO_LOG_FILE  (未設定ならファイル出力しない)

    何度呼んでもハンドラが重複しないよう、既存ハンドラは入れ替える。
    """
    level_name = (level or get_env("NOMO_LOG_LEVEL", default="INFO", required=False)).upper()
    log_file = log_file or get_env("NOMO_LOG_FILE", required=False)

    root = logging.getLogger("nomo")
    root.setLevel(getattr(logging, level_name, logging.INFO))

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if log_file:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root
