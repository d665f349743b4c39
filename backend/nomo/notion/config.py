# backend/nomo/notion/config.py

"""
Notion 連携に必要な設定値をまとめるモジュール。

シークレットとデータベース ID はユーザーごとの Binding が持つので、
ここではすべてのユーザーに共通の値だけを扱う。
"""

from dataclasses import dataclass
from functools import lru_cache

from nomo.utils.config import get_env


@dataclass(frozen=True)
class NotionConfig:
    """Notion API 用の設定値コンテナ。"""

    api_base_url: str = "https://api.notion.com/v1"
    api_version: str = "2022-06-28"
    tag_property: str = "Tags"


@lru_cache()
def get_notion_config() -> NotionConfig:
    """
    環境変数から Notion 設定を読み込む。

    任意:
      - NOTION_API_BASE_URL (デフォルト: https://api.notion.com/v1)
      - NOTION_API_VERSION   (デフォルト: 2022-06-28)
      - NOTION_TAG_PROPERTY  (デフォルト: Tags) タグを書き込む multi_select プロパティ名
    """
    api_base_url = get_env(
        "NOTION_API_BASE_URL",
        default="https://api.notion.com/v1",
        required=False,
    )
    api_version = get_env(
        "NOTION_API_VERSION",
        default="2022-06-28",
        required=False,
    )
    tag_property = get_env(
        "NOTION_TAG_PROPERTY",
        default="Tags",
        required=False,
    )

    return NotionConfig(
        api_base_url=api_base_url.rstrip("/"),
        api_version=api_version,
        tag_property=tag_property,
    )
