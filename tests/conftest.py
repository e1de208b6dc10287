"""
Pytest configuration and fixtures
"""

from json import dumps
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

import pytest

from mtn_momo import ClientConfig, MomoCredentials, MtnMomoApiClient
from mtn_momo.http.adapter import AsyncHTTPAdapter

SANDBOX_URL = "https://sandbox.momodeveloper.mtn.com"
TOKEN_BODY = {"access_token": "tok_123", "token_type": "access_token", "expires_in": 3600}


class DummyAsyncAdapter(AsyncHTTPAdapter):
    """In-memory transport: canned responses per (method, path), records every request."""

    def __init__(self):
        self.requests = []
        self.routes = {}
        self.closed = False

    def add(
        self,
        method: str,
        path: str,
        status: int = 200,
        body: Optional[Any] = None,
        exc: Optional[Exception] = None,
    ) -> None:
        self.routes[(method, path)] = (status, body, exc)

    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        json: Optional[Any] = None,
        timeout: float = 10,
    ):
        path = urlsplit(url).path
        self.requests.append(
            {
                "method": method,
                "url": url,
                "path": path,
                "headers": headers,
                "json": json,
                "timeout": timeout,
            }
        )
        if (method, path) not in self.routes:
            return 404, dumps({"code": "RESOURCE_NOT_FOUND", "message": "Not found"}), {}

        status, body, exc = self.routes[(method, path)]
        if exc is not None:
            raise exc
        text = dumps(body) if body is not None else ""
        return status, text, {}

    async def close(self) -> None:
        self.closed = True

    def last(self, path: str) -> Dict[str, Any]:
        return [r for r in self.requests if r["path"] == path][-1]


@pytest.fixture
def credentials():
    """Disbursement sandbox credentials"""
    return MomoCredentials(
        environment="sandbox",
        product="disbursement",
        subscription_key="sub_key_123",
        api_user="api-user-1",
        api_key="secret-api-key",
    )


@pytest.fixture
def collection_credentials():
    return MomoCredentials(
        environment="sandbox",
        product="collection",
        subscription_key="sub_key_123",
        api_user="api-user-1",
        api_key="secret-api-key",
    )


@pytest.fixture
def adapter():
    """Dummy adapter with token endpoints for both products"""
    dummy = DummyAsyncAdapter()
    dummy.add("POST", "/disbursement/token/", 200, TOKEN_BODY)
    dummy.add("POST", "/collection/token/", 200, TOKEN_BODY)
    return dummy


@pytest.fixture
def client(credentials, adapter):
    return MtnMomoApiClient(credentials, http_adapter=adapter)


@pytest.fixture
def collection_client(collection_credentials, adapter):
    return MtnMomoApiClient(collection_credentials, ClientConfig(), http_adapter=adapter)
