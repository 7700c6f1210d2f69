from talentvote.extensions import db


class Vote(db.Model):
    __tablename__ = "votes"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    contestant_id = db.Column(
        db.Integer, db.ForeignKey("contestants.id"), nullable=False, index=True
    )
    # True = advances, False = does not advance.
    vote = db.Column(db.Boolean, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    __table_args__ = (
        db.UniqueConstraint("user_id", "contestant_id", name="uq_votes_user_contestant"),
    )
