# backend/nomo/memos/errors.py

"""
Dispatch 処理で発生しうる例外。

- ValidationError: 受信イベントが不正 / 文字コードが不正（リトライしない、通知しない）
- BindingNotFoundError: 送信者の Binding が未登録（想定内の結果。通知しない）
- ExternalAPIError: Notion へのページ作成に失敗（通知してから送出する）
"""

from typing import Any, Optional


class DispatchError(RuntimeError):
    """Dispatch 全般の基底例外。"""


class ValidationError(DispatchError):
    """受信イベントが不正な場合の例外。"""


class BindingNotFoundError(DispatchError):
    """送信者に対応する Binding が存在しない場合の例外。"""

    def __init__(self, platform: Any, external_user_id: str) -> None:
        platform_value = getattr(platform, "value", platform)
        super().__init__(
            f"No binding for platform={platform_value} user={external_user_id}"
        )
        self.platform = platform
        self.external_user_id = external_user_id


class ExternalAPIError(DispatchError):
    """Notion へのページ作成に失敗した場合の例外。"""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause
