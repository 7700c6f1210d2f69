import re

from flask import current_app
from sqlalchemy import func

from talentvote.errors import NotFound, ValidationError
from talentvote.extensions import db
from talentvote.models import User, Vote
from talentvote.models.user import ROLE_JUDGE, ROLES
from talentvote.services.security import hash_password, verify_password

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6


def normalize_email(email):
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


def _check_email(email, fields, exclude_user_id=None):
    if not EMAIL_PATTERN.match(email):
        fields["email"] = "Enter a valid email address."
        return
    query = User.query.filter(func.lower(User.email) == email)
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    if query.first() is not None:
        fields["email"] = "A user with this email already exists."


def _check_password(password, fields):
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        fields["password"] = (
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
        )


def _clean_name(name, fields):
    if not isinstance(name, str) or not name.strip():
        fields["name"] = "Name is required."
        return None
    return name.strip()


def get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def get_user_by_email(email):
    return User.query.filter(func.lower(User.email) == normalize_email(email)).first()


def list_users(role=None):
    query = User.query
    if role is not None:
        query = query.filter_by(role=role)
    return query.order_by(User.name.asc(), User.id.asc()).all()


def create_user(name, email, password, role=ROLE_JUDGE):
    fields = {}
    name = _clean_name(name, fields)
    email = normalize_email(email)
    _check_email(email, fields)
    _check_password(password, fields)
    if role not in ROLES:
        fields["role"] = "Role must be 'admin' or 'judge'."
    if fields:
        raise ValidationError(fields)

    user = User(name=name, email=email, password_hash=hash_password(password), role=role)
    db.session.add(user)
    db.session.commit()
    current_app.logger.info("User %s created with role %s", user.id, role)
    return user


def authenticate(email, password):
    user = get_user_by_email(email)
    if user is None or not verify_password(user.password_hash, password):
        current_app.logger.warning("Failed login for %s", normalize_email(email))
        return None
    return user


def update_user(user_id, name=None, email=None, password=None, role=None):
    """Change a user's profile fields. Roles are fixed once a user exists."""
    user = get_user(user_id)

    fields = {}
    if role is not None and role != user.role:
        fields["role"] = "A user's role cannot be changed."
    if name is not None:
        name = _clean_name(name, fields)
    if email is not None:
        email = normalize_email(email)
        _check_email(email, fields, exclude_user_id=user.id)
    if password is not None:
        _check_password(password, fields)
    if fields:
        raise ValidationError(fields)

    if name is not None:
        user.name = name
    if email is not None:
        user.email = email
    if password is not None:
        user.password_hash = hash_password(password)

    db.session.commit()
    return user


def delete_user(user_id, acting_user_id=None):
    """Delete a user together with every vote they cast.

    Results divide by the current judge roster, so keeping ballots from a
    judge who is no longer on it would skew every percentage.
    """
    user = get_user(user_id)
    if acting_user_id is not None and user.id == acting_user_id:
        raise ValidationError({"id": "You cannot delete your own account."})

    removed_votes = Vote.query.filter_by(user_id=user.id).delete(synchronize_session=False)
    db.session.expire(user, ["votes"])
    db.session.delete(user)
    db.session.commit()

    current_app.logger.info("User %s deleted along with %s vote(s)", user_id, removed_votes)
    return removed_votes
