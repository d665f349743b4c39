# backend/nomo/state.py

"""
アプリ全体で共有するインスタンスの状態管理モジュール。

- Binding リポジトリ（インメモリ）
- Dispatcher（環境変数から読んだ設定値と notify を注入して組み立てる）
- テスト時にリセットできるようにする

FastAPI の Depends から使う想定。テストでは app.dependency_overrides で差し替えてもよい。
"""

from __future__ import annotations

from typing import Optional

from nomo.bindings.repository import InMemoryBindingRepository
from nomo.bindings.resolver import BindingResolver
from nomo.bindings.service import BindingService
from nomo.memos.config import get_dispatcher_settings
from nomo.memos.dispatcher import Dispatcher
from nomo.notifications.factory import build_notifier
from nomo.notion.client import NotionClient

_binding_repository: Optional[InMemoryBindingRepository] = None
_dispatcher: Optional[Dispatcher] = None


def get_binding_repository() -> InMemoryBindingRepository:
    """
    共有の Binding リポジトリを返す。初回呼び出し時にのみ生成する。
    """
    global _binding_repository
    if _binding_repository is None:
        _binding_repository = InMemoryBindingRepository()
    return _binding_repository


def get_binding_service() -> BindingService:
    return BindingService(get_binding_repository())


def get_dispatcher() -> Dispatcher:
    """
    共有の Dispatcher を返す。初回呼び出し時にのみ生成する。

    Dispatcher 自体は状態を持たないので、全リクエストで同じインスタンスを使ってよい。
    """
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = Dispatcher(
            resolver=BindingResolver(get_binding_repository()),
            client=NotionClient(),
            notify=build_notifier(),
            settings=get_dispatcher_settings(),
        )
    return _dispatcher


def reset_state() -> None:
    """
    テスト用にシングルトン状態をリセットする。
    """
    global _binding_repository, _dispatcher
    _binding_repository = None
    _dispatcher = None
