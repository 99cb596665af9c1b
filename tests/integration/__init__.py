"""Integration tests for qiita-sync.

These tests run real git commands in temporary repositories and real
filesystem writes; only the HTTP session is mocked, so no network access
is needed. Select them with:
    pytest tests/integration -m integration
"""
