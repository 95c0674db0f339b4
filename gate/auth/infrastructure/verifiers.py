from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from gate.auth.domain.errors import AuthProviderError
from gate.auth.domain.outcome import DenialReason

YOUTUBE_API     = "https://www.googleapis.com/youtube/v3"
GITHUB_API      = "https://api.github.com"
SUBSCRIPTIONS_PAGE_SIZE = 50


class RelationshipVerifier(ABC):
    """Consulta a la API del proveedor si la cuenta tiene la relación exigida.

    Cada subclase resuelve dos cosas con el access token del visitante:
    el id de perfil (``fetch_profile_id``) y la relación (``check``).
    Cualquier falla de red o de la API sale como ``AuthProviderError``.
    """

    provider: str = ""
    denial_reason: DenialReason

    def __init__(self, *, http: Optional[requests.Session] = None, timeout: float | None = None) -> None:
        # Sin http inyectado se abre una Session por llamada
        self.http    = http
        self.timeout = timeout

    @abstractmethod
    def auth_headers(self, access_token: str) -> Dict[str, str]: ...

    @abstractmethod
    def fetch_profile_id(self, access_token: str) -> str: ...

    @abstractmethod
    def check(self, access_token: str) -> bool: ...

    # ── helpers HTTP ────────────────────────────────────────
    def _get(self, url: str, access_token: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        kwargs = {"headers": self.auth_headers(access_token), "params": params, "timeout": self.timeout}
        try:
            if self.http is not None:
                return self.http.get(url, **kwargs)
            with requests.Session() as http:
                return http.get(url, **kwargs)
        except requests.RequestException as exc:
            raise AuthProviderError(self.provider, f"request to {url} failed: {exc}") from exc

    def _json(self, resp: requests.Response) -> Dict[str, Any]:
        if not resp.ok:
            raise AuthProviderError(
                self.provider,
                f"HTTP {resp.status_code} from {resp.url}: {resp.text[:200]}",
                status=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise AuthProviderError(self.provider, f"invalid JSON from {resp.url}") from exc


class YouTubeSubscriptionVerifier(RelationshipVerifier):
    provider      = "youtube"
    denial_reason = DenialReason.NOT_SUBSCRIBED

    def __init__(self, channel_id: str, *, max_pages: int = 1, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.channel_id = channel_id
        self.max_pages  = max_pages

    def auth_headers(self, access_token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {access_token}"}

    def fetch_profile_id(self, access_token: str) -> str:
        data  = self._json(self._get(f"{YOUTUBE_API}/channels", access_token, {"part": "id", "mine": "true"}))
        items = data.get("items") or []
        if not items or not items[0].get("id"):
            raise AuthProviderError(self.provider, "account has no YouTube channel")
        return items[0]["id"]

    def check(self, access_token: str) -> bool:
        params: Dict[str, Any] = {"part": "snippet", "mine": "true", "maxResults": SUBSCRIPTIONS_PAGE_SIZE}
        pages = 0
        while True:
            data = self._json(self._get(f"{YOUTUBE_API}/subscriptions", access_token, params))
            pages += 1
            if any(self._channel_of(sub) == self.channel_id for sub in data.get("items") or []):
                return True
            next_token = data.get("nextPageToken")
            if not next_token or (self.max_pages and pages >= self.max_pages):
                return False
            params["pageToken"] = next_token

    @staticmethod
    def _channel_of(sub: Dict[str, Any]) -> Optional[str]:
        return ((sub.get("snippet") or {}).get("resourceId") or {}).get("channelId")


class GitHubFollowVerifier(RelationshipVerifier):
    provider      = "github"
    denial_reason = DenialReason.NOT_FOLLOWING

    def __init__(self, username: str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.username = username

    def auth_headers(self, access_token: str) -> Dict[str, str]:
        return {
            "Authorization": f"token {access_token}",
            "Accept":        "application/vnd.github+json",
        }

    def fetch_profile_id(self, access_token: str) -> str:
        data = self._json(self._get(f"{GITHUB_API}/user", access_token))
        if data.get("id") is None:
            raise AuthProviderError(self.provider, "profile without id")
        return str(data["id"])

    def check(self, access_token: str) -> bool:
        resp = self._get(f"{GITHUB_API}/user/following/{quote(self.username, safe='')}", access_token)
        # 204 => lo sigue; 404 => no lo sigue (no es error)
        if resp.status_code == 204:
            return True
        if resp.status_code == 404:
            return False
        raise AuthProviderError(
            self.provider,
            f"unexpected HTTP {resp.status_code} on follow check",
            status=resp.status_code,
        )
