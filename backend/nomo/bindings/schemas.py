# backend/nomo/bindings/schemas.py

"""
Binding 関連の Pydantic スキーマ定義。

※ secret_key は Notion のインテグレーショントークンなので、
  repr やレスポンスに出さないこと。
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Platform(str, Enum):
    """メモの送信元となるチャットプラットフォーム。"""

    WECHAT = "wechat"
    LARK = "lark"


class Binding(BaseModel):
    """
    チャットプラットフォーム上のユーザーと、
    書き込み先 Notion データベースの対応関係。
    """

    model_config = ConfigDict(frozen=True)

    platform: Platform = Field(..., description="送信元プラットフォーム")
    external_user_id: str = Field(
        ...,
        min_length=1,
        description="プラットフォーム側のユーザー ID（Lark の user_id / open_id など）",
    )
    secret_key: str = Field(
        ...,
        min_length=1,
        repr=False,
        description="Notion インテグレーションのシークレット",
    )
    database_id: str = Field(..., min_length=1, description="書き込み先 Notion データベース ID")


class BindRequest(BaseModel):
    """
    /api/v1/bind/{platform} のリクエストボディ。
    """

    user_id: str = Field(..., min_length=1, description="プラットフォーム側のユーザー ID")
    secret_key: str = Field(..., min_length=1, repr=False, description="Notion シークレット")
    database_id: str = Field(..., min_length=1, description="Notion データベース ID")


class BindResponse(BaseModel):
    """
    /api/v1/bind/{platform} のレスポンス。secret_key は返さない。
    """

    platform: Platform
    user_id: str
    database_id: str
    created: bool = Field(..., description="新規登録なら True、既存の更新なら False")
