from sqlalchemy import CheckConstraint, text

from talentvote.extensions import db


class Round(db.Model):
    __tablename__ = "rounds"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    round_number = db.Column(db.Integer, nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=False, index=True)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    contestants = db.relationship(
        "Contestant",
        backref="round",
        lazy=True,
        order_by="Contestant.order",
    )

    __table_args__ = (
        CheckConstraint("round_number >= 1", name="check_round_number"),
        # At most one row may carry is_active = true. MySQL has no partial
        # indexes, so there the activation transaction alone holds the line.
        db.Index(
            "uq_rounds_single_active",
            "is_active",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ).ddl_if(dialect=("sqlite", "postgresql")),
    )
