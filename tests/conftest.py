from pathlib import Path
import sys
import os

import pytest
from flask import g, has_app_context
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Safety default for any module-level app creation during test imports.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from talentvote import create_app
from talentvote.extensions import db
from talentvote.models import Contestant, Round, User
from talentvote.services.security import hash_password


class IsolatedLoginClient(FlaskClient):
    """Test client that reloads the logged-in user on every request.

    The `app` fixture keeps one app context pushed for the whole test, so all
    clients share a single `g` and Flask-Login would reuse `g._login_user`.
    """

    def open(self, *args, **kwargs):
        if has_app_context():
            g.pop("_login_user", None)
        return super().open(*args, **kwargs)


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            "SQLALCHEMY_ENGINE_OPTIONS": {},
            "SECRET_KEY": "test-secret",
        }
    )
    app.test_client_class = IsolatedLoginClient

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


@pytest.fixture()
def admin_user(db_session):
    user = User(
        name="Admin One",
        email="admin1@example.com",
        password_hash=hash_password("admin-pass"),
        role="admin",
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def judges(db_session):
    created = [
        User(
            name=f"Judge {index}",
            email=f"judge{index}@example.com",
            password_hash="hashed-password",
            role="judge",
        )
        for index in (1, 2, 3)
    ]
    db_session.add_all(created)
    db_session.commit()
    return created


@pytest.fixture()
def judge(judges):
    return judges[0]


@pytest.fixture()
def make_round(db_session):
    def _make_round(name="Round", round_number=1, is_active=False, description=None):
        round_ = Round(
            name=name,
            round_number=round_number,
            is_active=is_active,
            description=description,
        )
        db_session.add(round_)
        db_session.commit()
        return round_

    return _make_round


@pytest.fixture()
def make_contestant(db_session):
    def _make_contestant(round_, name="Contestant", order=1, visible=False, **extra):
        contestant = Contestant(
            name=name,
            class_name=extra.pop("class_name", "5.A"),
            age=extra.pop("age", 11),
            category=extra.pop("category", "Singing"),
            round_id=round_.id,
            order=order,
            is_visible_to_judges=visible,
            **extra,
        )
        db_session.add(contestant)
        db_session.commit()
        return contestant

    return _make_contestant


def _login_as(client, user):
    with client.session_transaction() as session:
        session["_user_id"] = str(user.id)
        session["_fresh"] = True
    return client


@pytest.fixture()
def admin_client(client, admin_user):
    return _login_as(client, admin_user)


@pytest.fixture()
def judge_client(app, judge):
    return _login_as(app.test_client(), judge)
