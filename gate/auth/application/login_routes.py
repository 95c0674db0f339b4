# gate/auth/application/login_routes.py
from __future__ import annotations
from typing import Dict, Optional

from flask import (
    Blueprint, Flask, abort, current_app, redirect,
    render_template, session, url_for,
)
from flask_login import (
    LoginManager, current_user,
    login_required, login_user, logout_user,
)

from gate.auth.application.verify_login import complete_login
from gate.auth.domain.errors import SessionError
from gate.auth.infrastructure.oauth import authorize_redirect, init_oauth
from gate.auth.infrastructure.user import InMemoryUserStore, User, UserStore
from gate.auth.infrastructure.verifiers import (
    GitHubFollowVerifier, RelationshipVerifier, YouTubeSubscriptionVerifier,
)
from gate.common.logging_utils import get_logger

USER_STORE_KEY = "gate.user_store"
VERIFIERS_KEY  = "gate.verifiers"

# ─────── Blueprint "auth" ───────
auth_bp = Blueprint("auth", __name__)


def get_user_store() -> UserStore:
    return current_app.extensions[USER_STORE_KEY]

def get_verifier(provider: str) -> RelationshipVerifier:
    verifiers: Dict[str, RelationshipVerifier] = current_app.extensions[VERIFIERS_KEY]
    verifier = verifiers.get(provider)
    if verifier is None:
        abort(404)
    return verifier

def _deny():
    return redirect(url_for("auth.not_authorised"))


# 1️⃣ Páginas públicas
@auth_bp.route("/")
def index():
    return render_template("index.html")

@auth_bp.route("/notautherised")
def not_authorised():
    return render_template("notautherised.html")

# 2️⃣ Inicia OAuth con el proveedor
@auth_bp.route("/auth/<provider>")
def login(provider: str):
    get_verifier(provider)
    redirect_uri = url_for("auth.callback", provider=provider, _external=True)
    current_app.logger.debug("redirect_uri=%s", redirect_uri)
    return authorize_redirect(provider, redirect_uri)

# 3️⃣ Callback: token + chequeo de relación
@auth_bp.route("/auth/<provider>/callback")
def callback(provider: str):
    outcome = complete_login(get_verifier(provider), get_user_store())
    if not outcome.allowed:
        return _deny()
    login_user(outcome.user)
    return redirect(url_for("auth.profile"))

# 4️⃣ Página protegida
@auth_bp.route("/profile")
@login_required
def profile():
    return render_template("protected.html", user=current_user)

# 5️⃣ Logout
@auth_bp.route("/logout")
def logout():
    key = current_user.get_id() if current_user.is_authenticated else None
    logout_user()
    if key:
        get_user_store().delete(key)
        get_logger().info("Usuario %s deslogueado y eliminado del store", key)
    return redirect(url_for("auth.index"))


# ─────── Inicialización de auth (application factory) ───────
def build_verifiers(app: Flask) -> Dict[str, RelationshipVerifier]:
    timeout = app.config["HTTP_TIMEOUT"]
    verifiers = [
        YouTubeSubscriptionVerifier(
            app.config["REQUIRED_CHANNEL_ID"],
            max_pages=app.config["YOUTUBE_MAX_PAGES"],
            timeout=timeout,
        ),
        GitHubFollowVerifier(app.config["REQUIRED_GITHUB_USER"], timeout=timeout),
    ]
    return {v.provider: v for v in verifiers}

def init_auth(app: Flask, user_store: Optional[UserStore] = None) -> None:
    app.extensions[USER_STORE_KEY] = user_store if user_store is not None else InMemoryUserStore()
    app.extensions[VERIFIERS_KEY]  = build_verifiers(app)

    lm = LoginManager(app)

    @lm.user_loader
    def load_user(key: str) -> Optional[User]:
        if not key:
            raise SessionError("User ID is undefined")
        return get_user_store().get(key)

    @lm.unauthorized_handler
    def unauthorized():
        get_logger().info("Acceso a /profile sin sesión: hay que suscribirse o seguir")
        return _deny()

    @app.errorhandler(SessionError)
    def session_error(err: SessionError):
        get_logger().warning("Sesión inválida: %s", err)
        session.clear()
        return _deny()

    init_oauth(app)
