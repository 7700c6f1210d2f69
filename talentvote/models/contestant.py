from sqlalchemy import CheckConstraint

from talentvote.extensions import db

MIN_AGE = 6
MAX_AGE = 18


class Contestant(db.Model):
    __tablename__ = "contestants"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    class_name = db.Column(db.String(100), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    category = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    round_id = db.Column(db.Integer, db.ForeignKey("rounds.id"), nullable=False, index=True)
    order = db.Column(db.Integer, nullable=False, default=1)
    is_visible_to_judges = db.Column(
        db.Boolean, nullable=False, default=False, index=True
    )
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    votes = db.relationship("Vote", backref="contestant", lazy=True)

    __table_args__ = (
        CheckConstraint(f"age BETWEEN {MIN_AGE} AND {MAX_AGE}", name="check_contestant_age"),
    )
