"""Round lifecycle: listing, creation and the single-active-round switch.

Activation is the only place that writes ``Round.is_active``. It runs as
one transaction (deactivate every round, then activate the target) so no
reader can observe zero or two active rounds halfway through. Two admins
activating different rounds at once is last-writer-wins.
"""

from flask import current_app
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from talentvote.errors import Conflict, NotFound, ValidationError
from talentvote.extensions import db
from talentvote.models import Round


def _parse_round_number(raw, fields):
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        fields["roundNumber"] = "Round number must be a whole number."
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        fields["roundNumber"] = "Round number must be a whole number."
        return None
    if value < 1:
        fields["roundNumber"] = "Round number must be at least 1."
        return None
    return value


def _clean_text(raw, key, label, fields):
    if raw is not None and not isinstance(raw, str):
        fields[key] = f"{label} must be text."
        return None
    return (raw or "").strip()


def list_rounds():
    return Round.query.order_by(Round.round_number.desc(), Round.id.desc()).all()


def get_round(round_id):
    round_ = db.session.get(Round, round_id)
    if round_ is None:
        raise NotFound("Round not found")
    return round_


def get_active_round():
    return Round.query.filter_by(is_active=True).first()


def create_round(name, round_number, description=None):
    fields = {}
    name = _clean_text(name, "name", "Round name", fields)
    if name == "":
        fields["name"] = "Round name is required."
    description = _clean_text(description, "description", "Description", fields) or None
    number = _parse_round_number(round_number, fields)
    if fields:
        raise ValidationError(fields)

    if Round.query.filter_by(round_number=number).first() is not None:
        current_app.logger.warning(
            "Creating round '%s' with duplicate round number %s", name, number
        )

    round_ = Round(name=name, description=description, round_number=number, is_active=False)
    db.session.add(round_)
    db.session.commit()
    current_app.logger.info("Round %s created (number %s)", round_.id, number)
    return round_


def update_round(round_id, name=None, description=None, round_number=None):
    round_ = get_round(round_id)

    fields = {}
    if name is not None:
        name = _clean_text(name, "name", "Round name", fields)
        if name == "":
            fields["name"] = "Round name is required."
    if description is not None:
        description = _clean_text(description, "description", "Description", fields)
    if round_number is not None:
        round_number = _parse_round_number(round_number, fields)
    if fields:
        raise ValidationError(fields)

    if name is not None:
        round_.name = name
    if description is not None:
        round_.description = description or None
    if round_number is not None:
        round_.round_number = round_number

    db.session.commit()
    return round_


def activate_round(round_id):
    round_ = get_round(round_id)

    try:
        db.session.execute(update(Round).values(is_active=False))
        db.session.execute(
            update(Round).where(Round.id == round_.id).values(is_active=True)
        )
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise Conflict(f"Could not activate round {round_id}: {exc.orig}") from exc

    db.session.refresh(round_)
    current_app.logger.info("Round %s activated", round_.id)
    return round_


def deactivate_all_rounds():
    db.session.execute(update(Round).values(is_active=False))
    db.session.commit()
    current_app.logger.info("All rounds deactivated")
