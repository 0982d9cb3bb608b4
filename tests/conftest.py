"""Pytest fixtures for strava-proxy tests."""

import time
from http.cookies import SimpleCookie
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx
import pytest
import pytest_asyncio

from strava_proxy.app import create_app
from strava_proxy.core import Settings
from strava_proxy.models import TokenRecord
from strava_proxy.services import COOKIE_NAME

Route = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class FakeStrava:
    """Records outgoing Strava requests and answers them from a route table."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Route] = {}

    def on(self, method: str, path: str, result: Route) -> None:
        self.routes[(method, path)] = result

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [
            r for r in self.requests if r.method == method and r.url.path == path
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.routes.get((request.method, request.url.path))
        if result is None:
            return httpx.Response(404, json={"message": "Record Not Found"})
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(request)
        return result


def set_cookies(response: httpx.Response) -> List[str]:
    return [
        header
        for header in response.headers.get_list("set-cookie")
        if header.startswith(f"{COOKIE_NAME}=")
    ]


def cookie_value(response: httpx.Response) -> Optional[str]:
    """Return the value of the token cookie set by ``response``, if any."""

    headers = set_cookies(response)
    if not headers:
        return None
    jar = SimpleCookie()
    jar.load(headers[-1])
    return jar[COOKIE_NAME].value


@pytest.fixture
def settings():
    return Settings(
        client_id="12345",
        client_secret="test_client_secret",
        redirect_uri="https://api.globalsport.test/oauth/callback",
        frontend_origin="https://globalsport.kz/",
        cookie_signing_secret="test-signing-secret",
    )


@pytest.fixture
def strava():
    return FakeStrava()


@pytest.fixture
def app(settings, strava):
    return create_app(settings, transport=httpx.MockTransport(strava))


@pytest.fixture
def store(app):
    return app.state.services.store


@pytest_asyncio.fixture
async def client(app):
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="https://proxy.test"
    ) as client:
        yield client


@pytest.fixture
def valid_record():
    return TokenRecord(
        access_token="test_access_token_12345",
        refresh_token="test_refresh_token_67890",
        expires_at=int(time.time()) + 6 * 3600,
        athlete_id=12345678,
    )


@pytest.fixture
def expired_record():
    return TokenRecord(
        access_token="expired_access_token",
        refresh_token="test_refresh_token_67890",
        expires_at=int(time.time()) - 3600,
        athlete_id=12345678,
    )


@pytest.fixture
def cookie_for(store):
    """Return a ``Cookie`` header carrying the given record."""

    def _cookie_for(record: TokenRecord) -> Dict[str, str]:
        return {"Cookie": f"{COOKIE_NAME}={store.encode(record)}"}

    return _cookie_for


def token_response(**overrides: Any) -> httpx.Response:
    payload = {
        "token_type": "Bearer",
        "access_token": "new_access_token",
        "refresh_token": "new_refresh_token",
        "expires_at": int(time.time()) + 6 * 3600,
        "expires_in": 21600,
    }
    payload.update(overrides)
    return httpx.Response(200, json=payload)
