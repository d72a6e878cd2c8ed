"""Pytest configuration and fixtures"""

import os

# Must be set before the application reads its settings
os.environ["LINE_CHANNEL_SECRET"] = "SECRET"
os.environ["LINE_CHANNEL_TOKEN"] = "TOKEN"
os.environ["LINE_API_ENDPOINT"] = "http://line-api.test/"

import base64
import hashlib
import hmac
from collections import deque
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from line_webhook.main import app
from line_webhook.api.deps import get_line_client
from line_webhook.services.line_client import LineMessagingClient

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class MockLineApi:
    """Records Messaging API requests and replays queued responses"""

    def __init__(self):
        self.requests = []
        self._responses = deque()
        self.transport = httpx.MockTransport(self._handle)

    def enqueue(self, status_code: int = 200, body: str = "{}"):
        self._responses.append(httpx.Response(status_code, content=body.encode("utf-8")))

    def take_request(self) -> httpx.Request:
        return self.requests.pop(0)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self._responses:
            return self._responses.popleft()
        return httpx.Response(200, content=b"{}")


def sign(body: bytes, secret: str = "SECRET") -> str:
    """Signature the way LINE computes it"""
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def load_fixture(name: str) -> bytes:
    return (FIXTURES_DIR / name).read_bytes()


@pytest.fixture(scope="function")
def line_api():
    """Mock Messaging API"""
    return MockLineApi()


@pytest.fixture(scope="function")
def line_client(line_api):
    """Messaging API client wired to the mock API"""
    return LineMessagingClient(
        channel_token="TOKEN",
        api_endpoint="http://line-api.test/",
        transport=line_api.transport
    )


@pytest.fixture(scope="function")
def client(line_client):
    """Test client fixture"""
    app.dependency_overrides[get_line_client] = lambda: line_client
    
    with TestClient(app) as test_client:
        yield test_client
    
    app.dependency_overrides.clear()


@pytest.fixture
def signer():
    """Function computing X-Line-Signature for a body"""
    return sign


@pytest.fixture
def callback_body():
    """Message event followed by a follow event"""
    return load_fixture("callback-request.json")
