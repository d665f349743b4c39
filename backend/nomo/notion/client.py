# backend/nomo/notion/client.py

"""
Notion API との通信を担当するクライアントモジュール。
"""

from typing import Any, Dict, Optional

import httpx

from .config import NotionConfig, get_notion_config
from .schemas import PageCreateRequest


class NotionClientError(RuntimeError):
    """Notion クライアント全般の例外。"""


class NotionAuthError(NotionClientError):
    """認証・権限関連のエラー。"""


class NotionAPIError(NotionClientError):
    """その他 Notion API 呼び出し時のエラー。"""


class NotionClient:
    """
    Notion API の薄いラッパークライアント。

    - ページの作成（メモ 1 件 = 1 ページ）

    シークレットはユーザーごとに異なるため、インスタンスには持たせず
    呼び出しごとに受け取る。リトライはしない。
    """

    def __init__(
        self,
        config: Optional[NotionConfig] = None,
        timeout: float = 10.0,
    ) -> None:
        self.config = config or get_notion_config()
        self._timeout = timeout

    def _build_headers(self, secret_key: str) -> Dict[str, str]:
        """
        Notion API 呼び出しに必要なヘッダーを構築。
        """
        return {
            "Authorization": f"Bearer {secret_key}",
            "Notion-Version": self.config.api_version,
            "Content-Type": "application/json",
        }

    def _raise_for_status(self, response: httpx.Response) -> None:
        """
        HTTP レスポンスコードに応じて適切な例外を投げる。
        """
        if response.status_code == 401:
            raise NotionAuthError("Unauthorized. Check the bound Notion secret key.")
        if response.status_code == 403:
            raise NotionAuthError("Forbidden. Check Notion integration permissions.")
        if response.status_code >= 400:
            raise NotionAPIError(
                f"Notion API error: {response.status_code} {response.text}"
            )

    def create_page(
        self,
        secret_key: str,
        database_id: str,
        request: PageCreateRequest,
        *,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        database_id のデータベースにページを 1 件作成する。

        :param timeout: この呼び出しだけに使うタイムアウト秒数（None ならインスタンスの既定値）
        :raises NotionAuthError: 401 / 403 の場合
        :raises NotionAPIError: その他 4xx / 5xx、またはレスポンスが JSON オブジェクトでない場合
        :raises NotionClientError: 接続エラー・タイムアウト時
        :return: 作成されたページオブジェクト
        """
        url = f"{self.config.api_base_url}/pages"

        payload = request.to_notion_payload(tag_property=self.config.tag_property)
        # 引数の database_id を正とする
        payload["parent"] = {"database_id": database_id}

        try:
            response = httpx.post(
                url,
                headers=self._build_headers(secret_key),
                json=payload,
                timeout=timeout if timeout is not None else self._timeout,
            )
        except httpx.RequestError as exc:
            raise NotionClientError(f"Failed to call Notion API: {exc}") from exc

        self._raise_for_status(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise NotionAPIError("Unexpected Notion API response: body is not JSON.") from exc

        if not isinstance(data, dict):
            raise NotionAPIError("Unexpected Notion API response format: page is not an object.")

        return data
