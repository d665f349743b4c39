# backend/nomo/notion/schemas.py

"""
Notion のページ作成リクエストを表現するスキーマ定義。

PageCreateRequest 自体はプレーンなデータ（タグ名と本文ブロック）だけを持ち、
Notion API の JSON 形式への変換は to_notion_payload() で行う。
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

# Notion の rich_text オブジェクト 1 つあたりの最大文字数
RICH_TEXT_MAX_LENGTH = 2000

# multi_select のオプション名は 100 文字まで、カンマは使えない
SELECT_OPTION_MAX_LENGTH = 100
SELECT_OPTION_FORBIDDEN = ","


def normalize_option_name(tag: str) -> str:
    """
    タグ名を Notion の multi_select に書けるオプション名にする。

    カンマは空白に置き換え、前後の空白を除いて 100 文字で切る。
    """
    name = tag.replace(SELECT_OPTION_FORBIDDEN, " ").strip()
    return name[:SELECT_OPTION_MAX_LENGTH].strip()


def _split_rich_text(content: str) -> List[Dict[str, Any]]:
    """
    本文を Notion の rich_text 配列に変換する。

    2000 文字を超える場合は複数の rich_text オブジェクトに分割する。
    空文字の場合は空配列（空の段落）になる。
    """
    return [
        {"type": "text", "text": {"content": content[i : i + RICH_TEXT_MAX_LENGTH]}}
        for i in range(0, len(content), RICH_TEXT_MAX_LENGTH)
    ]


class PageCreateRequest(BaseModel):
    """
    メモ 1 件分のページ作成リクエスト。

    - tags: タグ付き Segment ごとに 1 件（出現順、重複あり）
    - blocks: Segment ごとの本文（出現順）
    """

    model_config = ConfigDict(frozen=True)

    secret_key: str = Field(..., repr=False, description="Notion インテグレーションのシークレット")
    database_id: str = Field(..., description="書き込み先データベース ID")
    tags: List[str] = Field(default_factory=list, description="タグ名（出現順）")
    blocks: List[str] = Field(default_factory=list, description="段落ブロックの本文（出現順）")

    def option_names(self) -> List[str]:
        """
        multi_select に書くオプション名（正規化後に重複と空を除く）。

        tags 自体は scan の結果のまま保持する。
        """
        names = (normalize_option_name(tag) for tag in self.tags)
        return list(dict.fromkeys(name for name in names if name))

    def to_notion_payload(self, tag_property: str = "Tags") -> Dict[str, Any]:
        """
        POST /v1/pages のリクエストボディを組み立てる。

        multi_select は重複・カンマ・100 文字超の名前を受け付けないので option_names() を使う。
        """
        properties: Dict[str, Any] = {}
        option_names = self.option_names()
        if option_names:
            properties[tag_property] = {
                "multi_select": [{"name": name} for name in option_names]
            }

        children = [
            {
                "object": "block",
                "type": "paragraph",
                "paragraph": {"rich_text": _split_rich_text(content)},
            }
            for content in self.blocks
        ]

        return {
            "parent": {"database_id": self.database_id},
            "properties": properties,
            "children": children,
        }
