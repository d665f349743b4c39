# backend/nomo/notifications/__init__.py

"""
運用通知レイヤ用モジュール群。

Dispatcher から見た通知は `Callable[[str], None]` だけ。
このパッケージはその関数の裏側（ログ出力、管理者への送信関数など）を組み立てる。

構成イメージ:
- schemas: 通知メッセージの共通スキーマ
- service: 通知送信インターフェースと実装
- factory: アプリ全体で共有する通知サービスと notify 関数の生成
"""
