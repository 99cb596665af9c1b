"""Pytest configuration and fixtures for integration tests.

Provides a fake Qiita HTTP session that records requests and answers
item create/update calls the way the v2 API does.
"""

import json
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import pytest
import requests

from qiita_sync.qiita_client.api_wrapper import APIWrapper
from qiita_sync.qiita_client.auth import Credentials

API_URL = "https://qiita.example.com/api/v2"
TOKEN = "integration-token"


def json_response(status_code: int, body: Any, url: str) -> requests.Response:
    """Build a real requests.Response carrying a JSON body."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response._content = json.dumps(body).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


class FakeQiitaSession:
    """Stand-in for requests.Session backed by an in-memory item table.

    Attributes:
        items: Remote items by id
        requests: (method, url, json) for every request made
        fail_on: Optional (method, title) pair answered with HTTP 422
    """

    def __init__(self):
        self.headers: Dict[str, str] = {}
        self.items: Dict[str, Dict[str, Any]] = {}
        self.requests: List[tuple] = []
        self.fail_on: Optional[tuple] = None
        self._clock = 0

    def _now(self) -> str:
        self._clock += 1
        return f"2024-01-01T00:00:{self._clock:02d}+09:00"

    def request(self, method, url, json=None, timeout=None):
        self.requests.append((method, url, json))

        if self.fail_on == (method, json.get("title")):
            return json_response(422, {"message": "Tags is invalid", "type": "invalid_tag"}, url)

        if method == "POST" and url == f"{API_URL}/items":
            item_id = f"{len(self.items) + 1:020x}"
            now = self._now()
            self.items[item_id] = dict(json, id=item_id, created_at=now, updated_at=now)
            return json_response(201, self.items[item_id], url)

        if method == "PATCH" and url.startswith(f"{API_URL}/items/"):
            item_id = url.rsplit("/", 1)[1]
            if item_id not in self.items:
                return json_response(404, {"message": "Not found", "type": "not_found"}, url)
            self.items[item_id].update(json, updated_at=self._now())
            return json_response(200, self.items[item_id], url)

        return json_response(400, {"message": "Unexpected request", "type": "bad_request"}, url)


@pytest.fixture
def fake_session() -> FakeQiitaSession:
    return FakeQiitaSession()


@pytest.fixture
def fake_api(fake_session) -> APIWrapper:
    """APIWrapper talking to the fake session."""
    return APIWrapper(Credentials(api_url=API_URL, access_token=TOKEN), session=fake_session)


@pytest.fixture
def authenticator() -> Mock:
    auth = Mock()
    auth.get_credentials.return_value = Credentials(api_url=API_URL, access_token=TOKEN)
    return auth
