# backend/nomo/memos/router.py
"""
メモ受信用の FastAPI ルーター定義。

- /api/v1/message/lark : Lark のイベントコールバック
- /api/v1/message      : プラットフォーム共通の JSON イベント
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Union

from fastapi import APIRouter, Body, Depends, HTTPException, status

from nomo.state import get_dispatcher

from .dispatcher import Dispatcher
from .errors import BindingNotFoundError, ExternalAPIError, ValidationError
from .lark import get_url_verification_challenge, parse_lark_message_event
from .schemas import InboundMessageEvent, MessageAcceptedResponse

router = APIRouter(prefix="/api/v1/message", tags=["message"])


def _dispatch(
    dispatcher: Dispatcher,
    event: Union[InboundMessageEvent, Mapping[str, Any]],
) -> MessageAcceptedResponse:
    """
    Dispatcher の例外を HTTP ステータスに変換する。

    - ValidationError → 400
    - BindingNotFoundError → 404
    - ExternalAPIError → 502
    """
    try:
        dispatcher.handle(event)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except BindingNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No Notion database is bound to this user.",
        ) from exc
    except ExternalAPIError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to save memo to Notion.",
        ) from exc

    return MessageAcceptedResponse()


@router.post(
    "/lark",
    summary="Lark のメッセージ受信コールバック",
    description=(
        "url_verification には challenge を返し、"
        "テキストメッセージは Notion のページとして保存する。"
    ),
)
def handle_lark_message(
    body: Dict[str, Any] = Body(...),
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> Dict[str, Any]:
    try:
        challenge = get_url_verification_challenge(body)
        if challenge is not None:
            return {"challenge": challenge}

        event = parse_lark_message_event(body)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    if event is None:
        # メッセージ受信以外のイベントは受け取るだけ
        return {"status": "ignored"}

    return _dispatch(dispatcher, event).model_dump()


@router.post(
    "",
    response_model=MessageAcceptedResponse,
    summary="メモを 1 件保存",
)
def handle_message(
    body: Any = Body(...),
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> MessageAcceptedResponse:
    """
    {platform, external_sender_id, raw_text} を受け取り、Notion にページを作成する。

    ボディの検証は Dispatcher に任せ、項目の欠落も 400 として返す。
    """
    return _dispatch(dispatcher, body)
