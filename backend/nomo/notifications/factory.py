# backend/nomo/notifications/factory.py

"""
通知サービスの簡易ファクトリ。

- LoggingNotificationSender は常に登録する
- 管理者への送信関数が渡された場合は CallbackNotificationSender として追加する
"""

from __future__ import annotations

from typing import Callable, Optional

from .service import (
    CallbackNotificationSender,
    CompositeNotificationService,
    LoggingNotificationSender,
    NotificationSender,
)

_notification_service: Optional[CompositeNotificationService] = None


def build_notification_service(
    admin_callback: Optional[Callable[[str], None]] = None,
) -> CompositeNotificationService:
    """
    CompositeNotificationService を新しく組み立てる。
    """
    senders: list[NotificationSender] = [LoggingNotificationSender()]
    if admin_callback is not None:
        senders.append(CallbackNotificationSender(admin_callback))
    return CompositeNotificationService(senders)


def get_notification_service() -> CompositeNotificationService:
    """
    アプリ全体で共有する CompositeNotificationService を返す。

    初回呼び出し時にのみ生成し、それ以降は同じインスタンスを返す。
    """
    global _notification_service
    if _notification_service is None:
        _notification_service = build_notification_service()
    return _notification_service


def build_notifier(
    service: Optional[CompositeNotificationService] = None,
) -> Callable[[str], None]:
    """
    Dispatcher に注入する notify 関数を返す。
    """
    return (service or get_notification_service()).notify


def reset_notification_service() -> None:
    """
    テスト用に共有インスタンスをリセットする。
    """
    global _notification_service
    _notification_service = None
