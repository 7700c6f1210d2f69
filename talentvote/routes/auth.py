from flask_login import current_user, login_required, login_user, logout_user

from talentvote.errors import ValidationError
from talentvote.models.user import ROLE_JUDGE
from talentvote.routes.serializers import json_object, serialize_user
from talentvote.services import users as user_service
from talentvote.services.security import admin_required, generate_auth_token


def register_auth_routes(app):
    @app.route("/api/auth/login", methods=["POST"])
    def login():
        data = json_object()
        email = data.get("email")
        password = data.get("password")

        if not email or not password:
            raise ValidationError(
                {
                    key: "This field is required."
                    for key, value in (("email", email), ("password", password))
                    if not value
                }
            )

        user = user_service.authenticate(email, password)
        if user is None:
            return {"ok": False, "error": "Invalid credentials"}, 401

        login_user(user, remember=bool(data.get("remember")))
        return {"token": generate_auth_token(user.id), "user": serialize_user(user)}

    @app.route("/api/auth/logout", methods=["POST"])
    @login_required
    def logout():
        logout_user()
        return {"ok": True}

    @app.route("/api/auth/me")
    @login_required
    def me():
        return {"user": serialize_user(current_user)}

    @app.route("/api/auth/register", methods=["POST"])
    @login_required
    @admin_required
    def register():
        data = json_object()
        user = user_service.create_user(
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
            role=data.get("role") or ROLE_JUDGE,
        )
        return {"ok": True, "user": serialize_user(user)}, 201
