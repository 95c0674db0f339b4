from flask import Flask
from gate.auth.application.login_routes import auth_bp, init_auth
from gate.auth.infrastructure.user import UserStore


def set_routes(app: Flask, user_store: UserStore | None = None) -> None:

    @app.route("/health")
    def health_check():
        return "OK"

    # Auth routes
    init_auth(app, user_store)
    app.register_blueprint(auth_bp)
