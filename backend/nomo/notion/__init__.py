# backend/nomo/notion/__init__.py

"""
Notion 連携用モジュール群。

主な責務:
- メモ 1 件分のページ作成リクエスト（PageCreateRequest）の定義
- Notion API の POST /v1/pages を呼び出すクライアント
- API のベース URL やバージョンなどの設定値
"""
