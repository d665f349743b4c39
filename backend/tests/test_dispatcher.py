# backend/tests/test_dispatcher.py

from typing import List

import pytest

from nomo.bindings.repository import InMemoryBindingRepository
from nomo.bindings.resolver import BindingResolver
from nomo.bindings.schemas import Binding, Platform
from nomo.memos.config import DispatcherSettings
from nomo.memos.dispatcher import Dispatcher
from nomo.memos.errors import BindingNotFoundError, ExternalAPIError, ValidationError
from nomo.memos.schemas import InboundMessageEvent
from nomo.notion.client import NotionAPIError


class DummyClient:
    """
    NotionClient の代わりに使用するテスト用クライアント。
    """

    def __init__(self, error: Exception | None = None) -> None:
        self.calls = []
        self._error = error

    def create_page(self, secret_key, database_id, request, *, timeout=None):
        self.calls.append((secret_key, database_id, request, timeout))
        if self._error is not None:
            raise self._error
        return {"id": "page-1"}


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: List[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)


def _build_dispatcher(client: DummyClient, notifier, *, bound: bool = True) -> Dispatcher:
    repository = InMemoryBindingRepository()
    if bound:
        repository.save_binding(
            Binding(
                platform=Platform.LARK,
                external_user_id="user-1",
                secret_key="secret_dummy",
                database_id="db-1",
            )
        )
    return Dispatcher(
        resolver=BindingResolver(repository),
        client=client,
        notify=notifier,
        settings=DispatcherSettings(lookup_timeout_seconds=1.5, submit_timeout_seconds=3.0),
    )


def _event(text: str = "#科技 只是一条科技#美食 memo") -> InboundMessageEvent:
    return InboundMessageEvent(
        platform=Platform.LARK,
        external_sender_id="user-1",
        raw_text=text,
    )


def test_handle_success_submits_composed_request():
    client = DummyClient()
    notifier = RecordingNotifier()
    dispatcher = _build_dispatcher(client, notifier)

    result = dispatcher.handle(_event())

    assert result is None
    assert notifier.messages == []
    assert len(client.calls) == 1

    secret_key, database_id, request, timeout = client.calls[0]
    assert secret_key == "secret_dummy"
    assert database_id == "db-1"
    assert request.tags == ["科技", "美食"]
    assert request.blocks == ["只是一条科技", "memo"]
    assert timeout == 3.0


def test_handle_accepts_mapping_event():
    client = DummyClient()
    dispatcher = _build_dispatcher(client, RecordingNotifier())

    dispatcher.handle(
        {"platform": "lark", "external_sender_id": "user-1", "raw_text": "这是一条没有标签的memo"}
    )

    request = client.calls[0][2]
    assert request.tags == []
    assert request.blocks == ["这是一条没有标签的memo"]


def test_handle_decodes_utf8_bytes():
    client = DummyClient()
    dispatcher = _build_dispatcher(client, RecordingNotifier())

    dispatcher.handle(
        {
            "platform": "lark",
            "external_sender_id": "user-1",
            "raw_text": "#美食 火锅".encode("utf-8"),
        }
    )

    assert client.calls[0][2].tags == ["美食"]


def test_handle_binding_not_found_does_not_notify():
    client = DummyClient()
    notifier = RecordingNotifier()
    dispatcher = _build_dispatcher(client, notifier, bound=False)

    with pytest.raises(BindingNotFoundError):
        dispatcher.handle(_event())

    assert notifier.messages == []
    assert client.calls == []


def test_handle_submission_failure_notifies_once_and_raises():
    cause = NotionAPIError("Notion API error: 500 boom")
    client = DummyClient(error=cause)
    notifier = RecordingNotifier()
    dispatcher = _build_dispatcher(client, notifier)

    with pytest.raises(ExternalAPIError) as exc_info:
        dispatcher.handle(_event())

    assert exc_info.value.cause is cause
    assert exc_info.value.__cause__ is cause
    assert len(notifier.messages) == 1
    assert "user-1" in notifier.messages[0]
    assert "secret_dummy" not in notifier.messages[0]


def test_handle_submission_failure_survives_broken_notifier():
    """
    notify 自体が失敗しても、呼び出し元には ExternalAPIError が返ることを確認する。
    """
    client = DummyClient(error=NotionAPIError("down"))

    def broken_notifier(message: str) -> None:
        raise RuntimeError("notify failed")

    dispatcher = _build_dispatcher(client, broken_notifier)

    with pytest.raises(ExternalAPIError):
        dispatcher.handle(_event())


@pytest.mark.parametrize(
    "event",
    [
        {"platform": "lark", "external_sender_id": "user-1"},
        {"platform": "lark", "raw_text": "memo"},
        {"platform": "lark", "external_sender_id": "", "raw_text": "memo"},
        {"platform": "lark", "external_sender_id": "user-1", "raw_text": "   "},
        {"platform": "line", "external_sender_id": "user-1", "raw_text": "memo"},
        {"platform": "lark", "external_sender_id": "user-1", "raw_text": b"\xff\xfe"},
        {"platform": "lark", "external_sender_id": "user-1", "raw_text": "bad \ud800"},
        "not an event",
    ],
)
def test_handle_malformed_event_raises_validation_error(event):
    client = DummyClient()
    notifier = RecordingNotifier()
    dispatcher = _build_dispatcher(client, notifier)

    with pytest.raises(ValidationError):
        dispatcher.handle(event)

    assert client.calls == []
    assert notifier.messages == []


class RecordingRepository:
    """
    find_binding に渡された timeout を記録するテスト用リポジトリ。
    """

    def __init__(self, binding: Binding | None = None) -> None:
        self.calls = []
        self._binding = binding

    def find_binding(self, platform, external_user_id, *, timeout=None):
        self.calls.append((platform, external_user_id, timeout))
        return self._binding


def test_handle_passes_lookup_timeout_to_repository():
    repository = RecordingRepository(
        Binding(
            platform=Platform.LARK,
            external_user_id="user-1",
            secret_key="secret_dummy",
            database_id="db-1",
        )
    )
    client = DummyClient()
    dispatcher = Dispatcher(
        resolver=BindingResolver(repository),
        client=client,
        notify=RecordingNotifier(),
        settings=DispatcherSettings(lookup_timeout_seconds=0.5, submit_timeout_seconds=2.0),
    )

    dispatcher.handle(_event())

    assert repository.calls == [(Platform.LARK, "user-1", 0.5)]
    assert client.calls[0][3] == 2.0


def test_handle_passes_lookup_timeout_when_binding_missing():
    repository = RecordingRepository()
    notifier = RecordingNotifier()
    dispatcher = Dispatcher(
        resolver=BindingResolver(repository),
        client=DummyClient(),
        notify=notifier,
        settings=DispatcherSettings(lookup_timeout_seconds=0.25),
    )

    with pytest.raises(BindingNotFoundError):
        dispatcher.handle(_event())

    assert repository.calls == [(Platform.LARK, "user-1", 0.25)]
    assert notifier.messages == []
