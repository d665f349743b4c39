# backend/nomo/memos/dispatcher.py

"""
受信メッセージ 1 件を Notion ページにする Dispatch 処理。

処理の流れ:
  1. イベントの検証（不正なら ValidationError）
  2. scan でテキストを Segment 列に分解
  3. BindingResolver で送信者の Binding を取得（未登録なら BindingNotFoundError）
  4. compose で PageCreateRequest を組み立て
  5. Notion にページ作成。失敗時は notify してから ExternalAPIError

Dispatcher は呼び出し間で状態を持たない。
設定値と notify は外から注入し、環境変数やチャット SDK には依存しない。
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Union

from pydantic import ValidationError as PydanticValidationError

from nomo.bindings.resolver import BindingResolver
from nomo.notion.schemas import PageCreateRequest

from .composer import compose
from .config import DispatcherSettings
from .errors import ExternalAPIError, ValidationError
from .scanner import scan
from .schemas import InboundMessageEvent, Memo

logger = logging.getLogger(__name__)


# 運用上の異常を通知する関数（Lark の管理者宛てメッセージ、ログ出力など）
Notifier = Callable[[str], None]


class PageCreator(Protocol):
    """
    Notion へのページ作成インターフェース（NotionClient が満たす）。
    """

    def create_page(
        self,
        secret_key: str,
        database_id: str,
        request: PageCreateRequest,
        *,
        timeout: Optional[float] = None,
    ) -> Any:  # pragma: no cover - Protocol
        ...


def _ensure_utf8(text: str) -> None:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        # 孤立サロゲートなど UTF-8 にできない文字列
        raise ValidationError("Message text cannot be encoded as UTF-8.") from exc


def _decode_text(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValidationError("Message text is not valid UTF-8.") from exc
    if isinstance(value, str):
        _ensure_utf8(value)
    return value


def _validate_event(
    event: Union[InboundMessageEvent, Mapping[str, Any]],
) -> InboundMessageEvent:
    """
    イベントを InboundMessageEvent に正規化し、必須項目を検証する。
    """
    if not isinstance(event, InboundMessageEvent):
        if not isinstance(event, Mapping):
            raise ValidationError(f"Unsupported event type: {type(event).__name__}")

        data: Dict[str, Any] = dict(event)
        if "raw_text" in data:
            data["raw_text"] = _decode_text(data["raw_text"])
        try:
            event = InboundMessageEvent.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError(f"Malformed inbound event: {exc.errors()}") from exc

    if not event.external_sender_id.strip():
        raise ValidationError("Inbound event has no sender id.")
    if not event.raw_text.strip():
        raise ValidationError("Inbound event has no text.")

    _ensure_utf8(event.raw_text)
    return event


class Dispatcher:
    """
    scan → resolve → compose → submit を 1 トランザクションとして実行する。

    - BindingNotFoundError は想定内の結果なので notify しない
    - Notion への送信失敗だけを notify し、リトライはしない
    """

    def __init__(
        self,
        resolver: BindingResolver,
        client: PageCreator,
        notify: Notifier,
        settings: Optional[DispatcherSettings] = None,
    ) -> None:
        self._resolver = resolver
        self._client = client
        self._notify = notify
        self._settings = settings or DispatcherSettings()

    def handle(self, event: Union[InboundMessageEvent, Mapping[str, Any]]) -> None:
        """
        受信イベント 1 件を処理する。正常終了時は None を返す。

        :raises ValidationError: イベントが不正な場合
        :raises BindingNotFoundError: 送信者の Binding が未登録の場合
        :raises ExternalAPIError: Notion へのページ作成に失敗した場合
        """
        event = _validate_event(event)

        memo = Memo(
            raw_text=event.raw_text,
            segments=scan(event.raw_text),
            source_platform=event.platform,
            sender_external_id=event.external_sender_id,
        )

        binding = self._resolver.resolve(
            memo.source_platform,
            memo.sender_external_id,
            timeout=self._settings.lookup_timeout_seconds,
        )
        request = compose(binding, memo.segments)

        try:
            self._client.create_page(
                binding.secret_key,
                binding.database_id,
                request,
                timeout=self._settings.submit_timeout_seconds,
            )
        except Exception as exc:  # noqa: BLE001 - 送信失敗はすべて ExternalAPIError にする
            message = (
                "Failed to create Notion page. "
                f"platform={memo.source_platform.value} "
                f"user={memo.sender_external_id} "
                f"database={binding.database_id} "
                f"error={exc}"
            )
            logger.error(message)
            self._send_notification(message)
            raise ExternalAPIError(message, cause=exc) from exc

        logger.info(
            "Memo saved to Notion. platform=%s user=%s segments=%d tags=%d",
            memo.source_platform.value,
            memo.sender_external_id,
            len(memo.segments),
            len(memo.tags),
        )

    def _send_notification(self, message: str) -> None:
        """
        notify を呼ぶ。notify 自体の失敗で本来のエラーを隠さない。
        """
        try:
            self._notify(message)
        except Exception:  # noqa: BLE001 - 通知は本処理を止めない
            logger.exception("Notify callback failed.")
