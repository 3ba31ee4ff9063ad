from __future__ import annotations

import pytest

from case_workflow_lib.config import reset_settings

_ENV_VARS = (
    "WORKFLOW_API_BASE_URL",
    "WORKFLOW_API_TIMEOUT",
    "WORKFLOW_BULK_CAPABLE_ROLES",
    "WORKFLOW_READ_RETRY_ATTEMPTS",
)


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
