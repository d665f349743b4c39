# backend/nomo/main.py

"""
バックエンドアプリケーションのエントリーポイント。

- /api/v1/bind/*    : チャットユーザーと Notion データベースの紐付け
- /api/v1/message/* : メモ受信（Lark コールバック / 共通 JSON）
- /ping, /health    : 死活監視
"""

from fastapi import FastAPI

from nomo.bindings.router import router as bind_router
from nomo.memos.router import router as message_router
from nomo.utils.logging_config import configure_logging


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。
    """
    configure_logging()

    app = FastAPI(title="nomo")

    # ルーター登録
    app.include_router(bind_router)
    app.include_router(message_router)

    @app.get("/ping", tags=["health"])
    def ping() -> str:
        return "ping succ"

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
