from __future__ import annotations
from datetime import timedelta
from typing import Any, Mapping
from flask import Flask
from flask_cors import CORS
from gate import config
from gate.auth.infrastructure.user import UserStore
from gate.common.logging_utils import configure_logging
from gate.routes import set_routes
from werkzeug.middleware.proxy_fix import ProxyFix


def create_app(overrides: Mapping[str, Any] | None = None, *, user_store: UserStore | None = None) -> Flask:
    app = Flask(
        __name__,
        template_folder="templates",
        static_folder="static",
    )
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    # ── Básico ───────────────────────────────────────────
    app.config["SECRET_KEY"] = config.FLASK_SECRET
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["APPLICATION_ROOT"] = "/"
    app.permanent_session_lifetime = timedelta(hours=4)

    # ── OAuth + relaciones exigidas ──────────────────────
    app.config.update(
        YOUTUBE_CLIENT_ID     = config.YOUTUBE_CLIENT_ID,
        YOUTUBE_CLIENT_SECRET = config.YOUTUBE_CLIENT_SECRET,
        GITHUB_CLIENT_ID      = config.GITHUB_CLIENT_ID,
        GITHUB_CLIENT_SECRET  = config.GITHUB_CLIENT_SECRET,
        REQUIRED_CHANNEL_ID   = config.REQUIRED_CHANNEL_ID,
        REQUIRED_GITHUB_USER  = config.REQUIRED_GITHUB_USER,
        YOUTUBE_MAX_PAGES     = config.YOUTUBE_MAX_PAGES,
        HTTP_TIMEOUT          = config.HTTP_TIMEOUT,
        LOG_LEVEL             = config.LOG_LEVEL,
        CORS_ORIGINS          = config.CORS_ORIGINS,
    )
    if overrides:
        app.config.update(overrides)

    # ── Logger ───────────────────────────────────────────
    configure_logging(app, app.config["LOG_LEVEL"])

    if not app.config["SECRET_KEY"]:
        app.logger.warning("FLASK_SECRET no configurado: la sesión no va a funcionar")

    # ── CORS ─────────────────────────────────────────────
    CORS(app, supports_credentials=True, origins=app.config["CORS_ORIGINS"])

    #--- ROUTER -----------
    set_routes(app, user_store)

    return app
