# backend/nomo/memos/__init__.py

"""
メモ（チャットで送られたテキスト）を Notion ページにするためのモジュール群。

主な責務:
- scanner: `#タグ` を含むテキストを順序付きの Segment 列に分解する
- composer: Segment 列と Binding から Notion のページ作成リクエストを組み立てる
- dispatcher: 受信イベント 1件を scan → resolve → compose → submit で処理する
- lark / router: Lark のコールバックと /api/v1/message エンドポイント
"""
