# backend/nomo/notifications/service.py

"""
通知送信インターフェースと実装。

- NotificationMessage を受け取る send() インターフェース
- ログ出力のみ行う LoggingNotificationSender
- 任意の送信関数（例: Lark ボットで管理者にテキスト送信）を包む CallbackNotificationSender
- 複数 Sender にファンアウトし、Dispatcher 用の notify 関数にもなる CompositeNotificationService
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Protocol

from .schemas import NotificationChannel, NotificationMessage, NotificationSeverity

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "nomo"


class NotificationSender(Protocol):
    """通知送信の最小インターフェース。"""

    def send(self, message: NotificationMessage) -> None:  # pragma: no cover - Protocol
        ...


class LoggingNotificationSender:
    """
    NotificationMessage を Python の logger に記録するだけの Sender。

    管理者の送信先が設定されていない環境ではこれだけを使う。
    """

    def __init__(self, logger_: logging.Logger | None = None) -> None:
        self._logger = logger_ or logger

    def send(self, message: NotificationMessage) -> None:
        """
        通知メッセージを重要度に応じたログレベルで出力する。
        """
        text = f"Notify ==> [{message.channel.value}] {message.title} {message.body}"

        if message.severity == NotificationSeverity.ALERT:
            self._logger.error(text)
        elif message.severity == NotificationSeverity.WARNING:
            self._logger.warning(text)
        else:
            self._logger.info(text)


class CallbackNotificationSender:
    """
    テキストを受け取る送信関数をそのまま Sender として使うアダプタ。

    チャット SDK への依存はこの関数を作る側（アプリの組み立て）に閉じ込める。
    """

    def __init__(
        self,
        callback: Callable[[str], None],
        channel: NotificationChannel = NotificationChannel.LARK,
    ) -> None:
        self._callback = callback
        self._channel = channel

    def send(self, message: NotificationMessage) -> None:
        if message.channel not in (self._channel, NotificationChannel.INTERNAL_LOG):
            return
        self._callback(message.as_text())


class CompositeNotificationService:
    """
    複数の NotificationSender に通知をファンアウトするサービス。

    ある Sender が失敗しても残りの Sender には送信を続ける。
    """

    def __init__(self, senders: Iterable[NotificationSender]) -> None:
        self._senders: List[NotificationSender] = list(senders)

    def send(self, message: NotificationMessage) -> None:
        """
        受け取った NotificationMessage を全 Sender に送信する。
        """
        for sender in self._senders:
            try:
                sender.send(message)
            except Exception:  # noqa: BLE001 - 通知は本処理を止めない
                logger.exception("Notification sender failed. Continuing with others.")

    def notify(self, text: str) -> None:
        """
        Dispatcher に渡す notify 関数本体。

        テキストを ALERT の NotificationMessage に包んで send() する。
        """
        self.send(
            NotificationMessage(
                channel=NotificationChannel.INTERNAL_LOG,
                severity=NotificationSeverity.ALERT,
                title=DEFAULT_TITLE,
                body=text,
            )
        )
