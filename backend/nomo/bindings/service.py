# backend/nomo/bindings/service.py

"""
Binding 登録（/bind）のサービス層。
"""

import logging

from .repository import InMemoryBindingRepository
from .schemas import Binding, BindRequest, BindResponse, Platform

logger = logging.getLogger(__name__)


class BindingService:
    """
    BindRequest を Binding に変換してリポジトリへ保存する。

    同じ (platform, user_id) で再度呼ばれた場合は上書きする。
    """

    def __init__(self, repository: InMemoryBindingRepository) -> None:
        self._repository = repository

    def bind(self, platform: Platform, request: BindRequest) -> BindResponse:
        binding = Binding(
            platform=platform,
            external_user_id=request.user_id,
            secret_key=request.secret_key,
            database_id=request.database_id,
        )
        created = self._repository.save_binding(binding)

        # secret_key はログに出さない
        logger.info(
            "Binding saved. platform=%s user=%s database=%s created=%s",
            binding.platform.value,
            binding.external_user_id,
            binding.database_id,
            created,
        )

        return BindResponse(
            platform=binding.platform,
            user_id=binding.external_user_id,
            database_id=binding.database_id,
            created=created,
        )
