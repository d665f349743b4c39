# backend/nomo/bindings/repository.py

"""
Binding の保存先。

本番の永続化層（RDB など）はこのモジュールの BindingRepository
プロトコルを満たす実装を差し込む前提。
ここではプロセス内で完結する InMemoryBindingRepository を提供する。
"""

from __future__ import annotations

import threading
from typing import Dict, Optional, Protocol, Tuple

from .schemas import Binding, Platform


class BindingRepository(Protocol):
    """
    Binding の読み取りインターフェース。

    見つからない場合は None を返す（例外にはしない）。
    timeout はこの呼び出しの上限秒数。I/O を伴う実装はこれを超えて待たないこと。
    """

    def find_binding(
        self,
        platform: Platform,
        external_user_id: str,
        *,
        timeout: Optional[float] = None,
    ) -> Optional[Binding]:  # pragma: no cover - Protocol
        ...


class InMemoryBindingRepository:
    """
    dict ベースの Binding リポジトリ。

    - 複数リクエストから同時に読み書きされても壊れないよう、
      dict の読み書きだけをロックで囲む
    - プロセス再起動で内容は消える
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._bindings: Dict[Tuple[Platform, str], Binding] = {}

    def find_binding(
        self,
        platform: Platform,
        external_user_id: str,
        *,
        timeout: Optional[float] = None,
    ) -> Optional[Binding]:
        # dict の参照だけなので timeout は使わない
        with self._lock:
            return self._bindings.get((Platform(platform), external_user_id))

    def save_binding(self, binding: Binding) -> bool:
        """
        Binding を登録または上書きする。

        :return: 新規登録なら True、既存レコードの更新なら False
        """
        key = (binding.platform, binding.external_user_id)
        with self._lock:
            created = key not in self._bindings
            self._bindings[key] = binding
        return created

    def __len__(self) -> int:
        with self._lock:
            return len(self._bindings)
