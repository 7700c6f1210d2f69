from functools import wraps

from flask import current_app
from flask_login import current_user
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from talentvote.errors import Forbidden


def hash_password(password):
    return generate_password_hash(password, method="pbkdf2:sha256")


def verify_password(password_hash, password):
    if not password_hash or not isinstance(password, str):
        return False
    return check_password_hash(password_hash, password)


def _token_serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"])


def generate_auth_token(user_id):
    return _token_serializer().dumps({"user_id": user_id}, salt="auth-token")


def verify_auth_token(token, max_age=None):
    """Return the user id carried by ``token``, or None if it is bad or stale."""
    if max_age is None:
        max_age = current_app.config.get("AUTH_TOKEN_MAX_AGE", 86400)
    try:
        payload = _token_serializer().loads(token, salt="auth-token", max_age=max_age)
    except (BadSignature, SignatureExpired):
        return None
    if not isinstance(payload, dict):
        return None
    return payload.get("user_id")


def bearer_token_from_header(header_value):
    if not header_value:
        return None
    scheme, _, token = header_value.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def admin_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated or not current_user.is_admin:
            raise Forbidden("Admin access required")
        return view(*args, **kwargs)

    return wrapped


def judge_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated or not current_user.is_judge:
            raise Forbidden("Judge access required")
        return view(*args, **kwargs)

    return wrapped
