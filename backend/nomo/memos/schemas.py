# backend/nomo/memos/schemas.py

"""
メモ処理で扱う内部モデル。

- Segment: scan 結果の 1 単位（タグ + 本文 + 出現順）
- Memo: 受信メッセージ 1 件分（保存はしない）
- InboundMessageEvent: 受信レイヤから Dispatcher に渡されるイベント
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from nomo.bindings.schemas import Platform


class Segment(BaseModel):
    """
    タグ付きテキストの 1 区切り。

    tag が空文字の場合はタグなしの本文。
    order は scan で出現した順に 0 から振られる。
    """

    model_config = ConfigDict(frozen=True)

    tag: str = Field("", description="タグ名（# を除く）。空文字はタグなし")
    content: str = Field("", description="タグに続く本文")
    order: int = Field(..., ge=0, description="出現順（0 始まりの連番）")

    @property
    def is_tagged(self) -> bool:
        return self.tag != ""


class Memo(BaseModel):
    """
    受信メッセージ 1 件分のメモ。

    Dispatcher 内でのみ使い、永続化は Notion 側に任せる。
    """

    model_config = ConfigDict(frozen=True)

    raw_text: str
    segments: List[Segment]
    source_platform: Platform
    sender_external_id: str

    @property
    def tags(self) -> List[str]:
        return [segment.tag for segment in self.segments if segment.is_tagged]


class InboundMessageEvent(BaseModel):
    """
    受信レイヤ（Lark コールバックなど）から渡されるイベント。

    必須項目の欠落チェックは Dispatcher 側で行い、ValidationError に変換する。
    """

    platform: Platform = Field(..., description="送信元プラットフォーム")
    external_sender_id: str = Field(..., description="送信者のプラットフォーム側 ID")
    raw_text: str = Field(..., description="メッセージ本文（UTF-8）")


class MessageAcceptedResponse(BaseModel):
    """
    /api/v1/message 系エンドポイントの正常レスポンス。
    """

    status: str = "ok"
