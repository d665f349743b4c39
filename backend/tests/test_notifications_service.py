# backend/tests/test_notifications_service.py

import logging
from typing import List

from nomo.notifications.factory import build_notification_service, build_notifier
from nomo.notifications.schemas import NotificationChannel, NotificationMessage, NotificationSeverity
from nomo.notifications.service import (
    CallbackNotificationSender,
    CompositeNotificationService,
    LoggingNotificationSender,
)


def test_logging_notification_sender_uses_correct_log_level(caplog) -> None:
    """
    LoggingNotificationSender が severity に応じたログレベルで出力することを確認。
    """
    logger = logging.getLogger("test_logger_notifications")
    sender = LoggingNotificationSender(logger_=logger)

    messages = [
        NotificationMessage(severity=NotificationSeverity.INFO, title="t", body="info-body"),
        NotificationMessage(severity=NotificationSeverity.WARNING, title="t", body="warn-body"),
        NotificationMessage(severity=NotificationSeverity.ALERT, title="t", body="alert-body"),
    ]

    with caplog.at_level(logging.INFO, logger="test_logger_notifications"):
        for message in messages:
            sender.send(message)

    levels = {
        body: [r.levelno for r in caplog.records if body in r.getMessage()]
        for body in ("info-body", "warn-body", "alert-body")
    }
    assert levels["info-body"] == [logging.INFO]
    assert levels["warn-body"] == [logging.WARNING]
    assert levels["alert-body"] == [logging.ERROR]


class DummySender:
    def __init__(self) -> None:
        self.messages: List[NotificationMessage] = []

    def send(self, message: NotificationMessage) -> None:
        self.messages.append(message)


class FailingSender:
    def send(self, message: NotificationMessage) -> None:
        raise RuntimeError("sender down")


def test_composite_notification_service_fanout() -> None:
    """
    1つの Sender が失敗しても、残りの Sender に送信されることを確認。
    """
    sender1 = DummySender()
    sender2 = DummySender()
    service = CompositeNotificationService([sender1, FailingSender(), sender2])

    msg = NotificationMessage(title="test", body="hello")

    service.send(msg)

    assert sender1.messages == [msg]
    assert sender2.messages == [msg]


def test_notify_wraps_text_as_alert() -> None:
    sender = DummySender()
    notify = build_notifier(CompositeNotificationService([sender]))

    notify("Failed to create Notion page.")

    assert len(sender.messages) == 1
    message = sender.messages[0]
    assert message.severity == NotificationSeverity.ALERT
    assert message.channel == NotificationChannel.INTERNAL_LOG
    assert message.body == "Failed to create Notion page."


def test_callback_sender_receives_plain_text() -> None:
    received: List[str] = []
    service = build_notification_service(admin_callback=received.append)

    service.notify("page create failed")

    assert received == ["[alert] nomo\npage create failed"]


def test_callback_sender_ignores_other_channels() -> None:
    received: List[str] = []
    sender = CallbackNotificationSender(received.append, channel=NotificationChannel.LARK)

    sender.send(NotificationMessage(channel=NotificationChannel.WECHAT, title="t", body="b"))
    sender.send(NotificationMessage(channel=NotificationChannel.LARK, title="t", body="b"))

    assert received == ["[alert] t\nb"]
