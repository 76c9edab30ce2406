import json

import httpx
import pytest
from fastapi.testclient import TestClient

from saavn_relay.config import Settings
from saavn_relay.main import create_app

SEARCH_HOST = "www.jiosaavn.com"
DETAIL_HOST = "saavn.dev"

DOWNLOAD_URLS = [
    {"quality": "12kbps", "url": "https://aac.saavncdn.com/815/abc_12.mp4"},
    {"quality": "96kbps", "url": "https://aac.saavncdn.com/815/abc_96.mp4"},
    {"quality": "320kbps", "url": "https://aac.saavncdn.com/815/abc_320.mp4"},
]


class FakeUpstream:
    """Answers both upstream APIs from canned payloads and records every request."""

    def __init__(self):
        self.search_payload = {"results": [{"id": "OGcDUqoq", "title": "Faded"}]}
        self.detail_payload = {"success": True, "data": [{"id": "OGcDUqoq", "downloadUrl": DOWNLOAD_URLS}]}
        self.search_error = None
        self.detail_error = None
        self.requests = []

    def _respond(self, payload, error, request):
        if error is not None:
            raise error
        if isinstance(payload, (bytes, str)):
            return httpx.Response(200, content=payload, request=request)
        return httpx.Response(200, content=json.dumps(payload).encode(), request=request)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == SEARCH_HOST:
            return self._respond(self.search_payload, self.search_error, request)
        if request.url.host == DETAIL_HOST:
            return self._respond(self.detail_payload, self.detail_error, request)
        return httpx.Response(599, request=request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(PORT=3999)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def client(test_settings, upstream):
    app = create_app(test_settings, transport=upstream.transport)
    with TestClient(app) as test_client:
        yield test_client
