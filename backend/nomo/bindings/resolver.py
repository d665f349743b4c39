# backend/nomo/bindings/resolver.py

"""
送信者 (platform, external_user_id) から Binding を解決する。
"""

import logging
from typing import Optional

from nomo.memos.errors import BindingNotFoundError

from .repository import BindingRepository
from .schemas import Binding, Platform

logger = logging.getLogger(__name__)


class BindingResolver:
    """
    BindingRepository を読むだけのリゾルバ。

    自身は状態を持たないので、複数の Dispatch から同時に呼ばれてもよい。
    """

    def __init__(self, repository: BindingRepository) -> None:
        self._repository = repository

    def resolve(
        self,
        platform: Platform,
        external_user_id: str,
        *,
        timeout: Optional[float] = None,
    ) -> Binding:
        """
        Binding を返す。未登録なら BindingNotFoundError。

        :param timeout: リポジトリ参照の上限秒数（そのままリポジトリに渡す）
        """
        binding = self._repository.find_binding(
            platform, external_user_id, timeout=timeout
        )
        if binding is None:
            logger.info(
                "No binding configured. platform=%s user=%s",
                Platform(platform).value,
                external_user_id,
            )
            raise BindingNotFoundError(platform, external_user_id)
        return binding
