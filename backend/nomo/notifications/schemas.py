# backend/nomo/notifications/schemas.py

"""
通知メッセージの共通スキーマ定義。

※ NotificationMessage には Notion のシークレットやメモ本文を含めないこと。
  送信者 ID・データベース ID・エラー内容程度にとどめる。
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class NotificationChannel(str, Enum):
    """
    通知の論理的なチャンネル種別。

    - INTERNAL_LOG: アプリ内部ログ（デフォルト）
    - LARK: Lark の管理者宛てメッセージ
    - WECHAT: WeChat の管理者宛てメッセージ
    """

    INTERNAL_LOG = "internal_log"
    LARK = "lark"
    WECHAT = "wechat"


class NotificationSeverity(str, Enum):
    """通知の重要度。"""

    INFO = "info"
    WARNING = "warning"
    ALERT = "alert"


class NotificationMessage(BaseModel):
    """
    通知 1件分の情報。body はプレーンテキスト想定。
    """

    channel: NotificationChannel = Field(
        NotificationChannel.INTERNAL_LOG,
        description="論理的な通知チャンネル（実際の送信先は Sender 実装側で解釈）。",
    )
    severity: NotificationSeverity = Field(
        NotificationSeverity.ALERT,
        description="通知の重要度。",
    )
    title: str = Field(..., description="短いタイトル（チャットの1行目など）。")
    body: str = Field(..., description="本文。")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="通知生成時刻（UTC）。",
    )

    def as_text(self) -> str:
        """チャットにそのまま送れる 1 つの文字列にする。"""
        return f"[{self.severity.value}] {self.title}\n{self.body}"
