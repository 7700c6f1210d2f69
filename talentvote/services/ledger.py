"""The vote ledger: one row per (judge, contestant), changed in place on revote.

``cast_vote`` is a single INSERT ... ON CONFLICT statement against the
``uq_votes_user_contestant`` constraint, so two concurrent first votes from
the same judge can never both insert. Reading first and then choosing
between insert and update is not safe here.
"""

from flask import current_app
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import IntegrityError

from talentvote.errors import Conflict, NotFound, ValidationError
from talentvote.extensions import db
from talentvote.models import Contestant, User, Vote


def _upsert_vote_statement(dialect_name, values):
    if dialect_name == "postgresql":
        stmt = postgresql.insert(Vote).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=[Vote.user_id, Vote.contestant_id],
            set_={"vote": stmt.excluded.vote},
        )

    if dialect_name == "sqlite":
        stmt = sqlite.insert(Vote).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=[Vote.user_id, Vote.contestant_id],
            set_={"vote": stmt.excluded.vote},
        )

    if dialect_name in ("mysql", "mariadb"):
        stmt = mysql.insert(Vote).values(**values)
        return stmt.on_duplicate_key_update(vote=stmt.inserted.vote)

    raise RuntimeError(f"Vote upsert is not supported on '{dialect_name}'")


def cast_vote(judge_id, contestant_id, value):
    if not isinstance(value, bool):
        raise ValidationError({"vote": "Vote must be true or false."})

    if db.session.get(User, judge_id) is None:
        raise NotFound("User not found")
    if db.session.get(Contestant, contestant_id) is None:
        raise NotFound("Contestant not found")

    statement = _upsert_vote_statement(
        db.engine.dialect.name,
        {"user_id": judge_id, "contestant_id": contestant_id, "vote": value},
    )

    try:
        db.session.execute(statement)
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        # A foreign key failure means the contestant or judge was deleted
        # after the lookups above.
        if db.session.get(Contestant, contestant_id) is None:
            raise NotFound("Contestant not found") from exc
        if db.session.get(User, judge_id) is None:
            raise NotFound("User not found") from exc
        raise Conflict(
            f"Vote upsert for judge {judge_id} / contestant {contestant_id} failed: {exc.orig}"
        ) from exc

    vote = (
        Vote.query.filter_by(user_id=judge_id, contestant_id=contestant_id)
        .populate_existing()
        .one()
    )
    current_app.logger.debug(
        "Judge %s voted %s for contestant %s", judge_id, value, contestant_id
    )
    return vote


def get_vote(judge_id, contestant_id):
    return Vote.query.filter_by(user_id=judge_id, contestant_id=contestant_id).first()


def get_votes_by_judge(judge_id):
    return (
        Vote.query.filter_by(user_id=judge_id)
        .order_by(Vote.created_at.desc(), Vote.id.desc())
        .all()
    )


def get_votes_by_contestant(contestant_id):
    return Vote.query.filter_by(contestant_id=contestant_id).all()


def list_all_votes():
    return Vote.query.order_by(Vote.created_at.desc(), Vote.id.desc()).all()


def delete_votes_for_contestant(contestant_id):
    if db.session.get(Contestant, contestant_id) is None:
        raise NotFound("Contestant not found")

    removed = Vote.query.filter_by(contestant_id=contestant_id).delete(
        synchronize_session="fetch"
    )
    db.session.commit()
    current_app.logger.info(
        "Removed %s vote(s) for contestant %s", removed, contestant_id
    )
    return removed
