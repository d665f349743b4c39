# backend/nomo/bindings/router.py

from fastapi import APIRouter, Depends

from nomo.state import get_binding_service

from .schemas import BindRequest, BindResponse, Platform
from .service import BindingService

router = APIRouter(prefix="/api/v1/bind", tags=["bind"])


@router.post(
    "/wx",
    response_model=BindResponse,
    summary="WeChat ユーザーと Notion データベースを紐付ける",
)
def bind_wechat(
    body: BindRequest,
    service: BindingService = Depends(get_binding_service),
) -> BindResponse:
    return service.bind(Platform.WECHAT, body)


@router.post(
    "/lark",
    response_model=BindResponse,
    summary="Lark ユーザーと Notion データベースを紐付ける",
)
def bind_lark(
    body: BindRequest,
    service: BindingService = Depends(get_binding_service),
) -> BindResponse:
    return service.bind(Platform.LARK, body)
