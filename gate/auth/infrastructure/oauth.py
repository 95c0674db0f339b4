from __future__ import annotations
from authlib.integrations.base_client import OAuthError
from authlib.integrations.flask_client import OAuth
from flask import Flask
import requests

from gate.auth.domain.errors import AuthProviderError

# ─────── Cliente OAuth (Authlib) ───────
# client_id / client_secret salen de app.config: YOUTUBE_CLIENT_ID, GITHUB_CLIENT_ID, ...
oauth = OAuth()
oauth.register(
    name             = "youtube",
    authorize_url    = "https://accounts.google.com/o/oauth2/v2/auth",
    access_token_url = "https://oauth2.googleapis.com/token",
    client_kwargs    = {"scope": "https://www.googleapis.com/auth/youtube.readonly"},
)
oauth.register(
    name             = "github",
    authorize_url    = "https://github.com/login/oauth/authorize",
    access_token_url = "https://github.com/login/oauth/access_token",
)

def _client(provider: str):
  client = oauth.create_client(provider)
  if client is None:
    raise LookupError(f"Proveedor OAuth no registrado: {provider}")
  return client

def authorize_redirect(provider: str, redirect_uri: str):
  return _client(provider).authorize_redirect(redirect_uri=redirect_uri)

def fetch_access_token(provider: str) -> str:
  """Intercambia el code del callback por un access token."""
  try:
    token = _client(provider).authorize_access_token()
  except (OAuthError, requests.RequestException) as exc:
    raise AuthProviderError(provider, f"token exchange failed: {exc}") from exc
  access_token = (token or {}).get("access_token")
  if not access_token:
    raise AuthProviderError(provider, "token endpoint returned no access_token")
  return access_token

def init_oauth(app:Flask):
  oauth.init_app(app)
