# backend/nomo/bindings/__init__.py

"""
チャットプラットフォームのユーザーと Notion データベースの紐付け（Binding）。

- schemas: Platform / Binding と /bind 用の入出力モデル
- repository: Binding の保存先インターフェースとインメモリ実装
- resolver: 送信者から Binding を引く読み取り専用のリゾルバ
- service: /bind で使う登録（upsert）処理
- router: /api/v1/bind/* エンドポイント
"""
