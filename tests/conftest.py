"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import pytest


@pytest.fixture(autouse=True)
def isolated_qiita_env(monkeypatch, tmp_path):
    """Keep tests independent of the developer's environment and .env file."""
    for name in (
        "QIITA_TOKEN",
        "QIITA_API_URL",
        "QIITA_SYNC_BASE_REF",
        "QIITA_SYNC_ROOT",
        "QIITA_SYNC_EXTENSION",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
