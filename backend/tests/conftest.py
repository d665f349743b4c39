# backend/tests/conftest.py
"""
Pytest configuration for nomo backend tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import nomo.*` works correctly in tests.
- Resets shared singletons (binding repository, dispatcher, cached settings)
  between tests so that one test's bindings never leak into another.
"""

import os
import sys
from pathlib import Path

import pytest


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        sys.path.insert(0, project_root_str)


def _ensure_test_env_vars() -> None:
    """
    Set environment variables for tests.

    Notion の URL は到達しないダミー。実際の HTTP 呼び出しは各テストでモックする。
    """
    os.environ.setdefault("NOTION_API_BASE_URL", "http://notion.invalid/v1")
    os.environ.setdefault("NOMO_LOG_LEVEL", "DEBUG")


_ensure_project_root_in_sys_path()
_ensure_test_env_vars()


@pytest.fixture(autouse=True)
def _reset_shared_state():
    from nomo.memos.config import get_dispatcher_settings
    from nomo.notifications.factory import reset_notification_service
    from nomo.notion.config import get_notion_config
    from nomo.state import reset_state

    reset_state()
    reset_notification_service()
    get_notion_config.cache_clear()
    get_dispatcher_settings.cache_clear()
    yield
    reset_state()
    reset_notification_service()
    get_notion_config.cache_clear()
    get_dispatcher_settings.cache_clear()
