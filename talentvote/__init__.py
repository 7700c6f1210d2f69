from flask import Flask, jsonify

from talentvote.cli import register_cli
from talentvote.config import Config
from talentvote.errors import register_error_handlers
from talentvote.extensions import db, login_manager, migrate
from talentvote.models import User
from talentvote.routes import register_routes
from talentvote.services.security import bearer_token_from_header, verify_auth_token


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.request_loader
    def load_user_from_request(request):
        token = bearer_token_from_header(request.headers.get("Authorization"))
        if token is None:
            return None
        user_id = verify_auth_token(token)
        if user_id is None:
            return None
        return db.session.get(User, user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"ok": False, "error": "Authentication required"}), 401

    register_error_handlers(app)
    register_routes(app)
    register_cli(app)
    return app


__all__ = ["create_app", "db", "migrate"]
