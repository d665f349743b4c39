# backend/nomo/memos/lark.py

"""
Lark（飛書）イベントコールバックのペイロードを InboundMessageEvent に変換する。

対応するのはスキーマ 2.0 の以下のみ:
- url_verification: challenge をそのまま返す
- im.message.receive_v1 の text メッセージ

署名検証・暗号化ペイロードの復号は受信レイヤ（ボット SDK 側）の責務とし、ここでは扱わない。
"""

import json
from typing import Any, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from nomo.bindings.schemas import Platform

from .errors import ValidationError
from .schemas import InboundMessageEvent

URL_VERIFICATION_TYPE = "url_verification"
MESSAGE_RECEIVE_EVENT_TYPE = "im.message.receive_v1"


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def get_url_verification_challenge(body: Mapping[str, Any]) -> Optional[str]:
    """
    URL 検証リクエストなら challenge を返す。それ以外は None。
    """
    if body.get("type") != URL_VERIFICATION_TYPE:
        return None

    challenge = body.get("challenge")
    if not isinstance(challenge, str):
        raise ValidationError("url_verification request has no challenge.")
    return challenge


def _extract_sender_id(event: Mapping[str, Any]) -> str:
    sender_id = _as_mapping(_as_mapping(event.get("sender")).get("sender_id"))
    for key in ("user_id", "open_id"):
        value = sender_id.get(key)
        if isinstance(value, str) and value:
            return value
    raise ValidationError("Lark message event has no sender id.")


def _extract_text(message: Mapping[str, Any]) -> str:
    message_type = message.get("message_type")
    if message_type != "text":
        raise ValidationError(f"Unsupported Lark message type: {message_type!r}")

    # content は JSON 文字列: {"text": "..."}
    raw_content = message.get("content")
    if not isinstance(raw_content, str):
        raise ValidationError("Lark message has no content.")

    try:
        content = json.loads(raw_content)
    except ValueError as exc:
        raise ValidationError("Lark message content is not valid JSON.") from exc

    text = _as_mapping(content).get("text")
    if not isinstance(text, str):
        raise ValidationError("Lark message content has no text.")
    return text


def parse_lark_message_event(body: Mapping[str, Any]) -> Optional[InboundMessageEvent]:
    """
    メッセージ受信イベントを InboundMessageEvent に変換する。

    メッセージ受信以外のイベントは None（呼び出し側で無視する）。
    """
    if "encrypt" in body:
        raise ValidationError("Encrypted Lark callbacks are not supported.")

    header = _as_mapping(body.get("header"))
    if header.get("event_type") != MESSAGE_RECEIVE_EVENT_TYPE:
        return None

    event = _as_mapping(body.get("event"))
    message = _as_mapping(event.get("message"))

    sender_id = _extract_sender_id(event)
    text = _extract_text(message)
    try:
        return InboundMessageEvent(
            platform=Platform.LARK,
            external_sender_id=sender_id,
            raw_text=text,
        )
    except PydanticValidationError as exc:
        raise ValidationError(f"Malformed Lark message event: {exc.errors()}") from exc
