"""Pytest fixtures for the channel gate."""

from __future__ import annotations

from typing import Any

import pytest
import requests

from gate import create_app
from gate.auth.application.login_routes import VERIFIERS_KEY
from gate.auth.infrastructure.user import InMemoryUserStore
from gate.auth.infrastructure.verifiers import GitHubFollowVerifier, YouTubeSubscriptionVerifier

TARGET_CHANNEL = "UCgIzTPYitha6idOdrr7M8sQ"
TARGET_USER = "bytemait"


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, json_data: Any = None, url: str = "") -> None:
        self.status_code = status_code
        self._json = json_data
        self.url = url
        self.text = "" if json_data is None else str(json_data)

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._json is None:
            raise ValueError("no JSON body")
        return self._json


class FakeHttp:
    """Records GET calls and answers from a url -> response(s) table."""

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self.routes = routes or {}
        self.calls: list[dict[str, Any]] = []

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "params": dict(params or {}), "timeout": timeout})
        answer = self.routes[url]
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, list):
            return answer.pop(0)
        return answer


def subscription(channel_id: str) -> dict:
    return {"snippet": {"resourceId": {"kind": "youtube#channel", "channelId": channel_id}}}


YT_CHANNELS = "https://www.googleapis.com/youtube/v3/channels"
YT_SUBSCRIPTIONS = "https://www.googleapis.com/youtube/v3/subscriptions"
GH_USER = "https://api.github.com/user"
GH_FOLLOWING = f"https://api.github.com/user/following/{TARGET_USER}"


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def app(user_store):
    app = create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test-secret",
            "YOUTUBE_CLIENT_ID": "yt-client",
            "YOUTUBE_CLIENT_SECRET": "yt-secret",
            "GITHUB_CLIENT_ID": "gh-client",
            "GITHUB_CLIENT_SECRET": "gh-secret",
            "REQUIRED_CHANNEL_ID": TARGET_CHANNEL,
            "REQUIRED_GITHUB_USER": TARGET_USER,
            "YOUTUBE_MAX_PAGES": 1,
        },
        user_store=user_store,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def youtube_http(app) -> FakeHttp:
    """Plug a fake HTTP session into the app's YouTube verifier."""
    http = FakeHttp({YT_CHANNELS: FakeResponse(200, {"items": [{"id": "UCvisitor"}]})})
    app.extensions[VERIFIERS_KEY]["youtube"] = YouTubeSubscriptionVerifier(TARGET_CHANNEL, http=http)
    return http


@pytest.fixture
def github_http(app) -> FakeHttp:
    """Plug a fake HTTP session into the app's GitHub verifier."""
    http = FakeHttp({GH_USER: FakeResponse(200, {"id": 4242, "login": "visitor"})})
    app.extensions[VERIFIERS_KEY]["github"] = GitHubFollowVerifier(TARGET_USER, http=http)
    return http


@pytest.fixture
def token_exchange(monkeypatch):
    """Skip the real OAuth code exchange; every callback gets 'access-123'."""
    calls: list[str] = []

    def fake_fetch(provider: str) -> str:
        calls.append(provider)
        return "access-123"

    monkeypatch.setattr("gate.auth.application.verify_login.fetch_access_token", fake_fetch)
    return calls


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")
