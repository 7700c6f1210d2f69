from flask_login import UserMixin
from sqlalchemy import CheckConstraint

from talentvote.extensions import db

ROLE_ADMIN = "admin"
ROLE_JUDGE = "judge"
ROLES = (ROLE_ADMIN, ROLE_JUDGE)


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    # Always stored lower-cased so login is case-insensitive.
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_JUDGE, index=True)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    votes = db.relationship("Vote", backref="user", lazy=True)

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'judge')", name="check_user_role"),
    )

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    @property
    def is_judge(self):
        return self.role == ROLE_JUDGE
