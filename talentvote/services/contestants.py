from flask import current_app

from talentvote.errors import NotFound, ValidationError
from talentvote.extensions import db
from talentvote.models import Contestant, Round, Vote
from talentvote.models.contestant import MAX_AGE, MIN_AGE

REQUIRED_TEXT_FIELDS = (
    ("name", "name", "Name"),
    ("class_name", "className", "Class"),
    ("category", "category", "Category"),
)


def _as_int(raw):
    if isinstance(raw, bool):
        raise ValueError("booleans are not numbers")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValueError(f"{raw} is not a whole number")
    return int(raw)


def _clean_fields(data, partial):
    """Validate contestant input and return the model attributes to set.

    ``data`` uses model attribute names. With ``partial`` only the keys that
    are present get checked, which is what updates need.
    """
    fields = {}
    cleaned = {}

    for attr, key, label in REQUIRED_TEXT_FIELDS:
        if attr not in data and partial:
            continue
        value = data.get(attr)
        if value is not None and not isinstance(value, str):
            fields[key] = f"{label} must be text."
            continue
        value = (value or "").strip()
        if not value:
            fields[key] = f"{label} is required."
        else:
            cleaned[attr] = value

    if "age" in data or not partial:
        try:
            age = _as_int(data.get("age"))
        except (TypeError, ValueError):
            fields["age"] = "Age must be a whole number."
        else:
            if age < MIN_AGE or age > MAX_AGE:
                fields["age"] = f"Age must be between {MIN_AGE} and {MAX_AGE}."
            else:
                cleaned["age"] = age

    if "order" in data or not partial:
        raw_order = data.get("order")
        try:
            order = 1 if raw_order is None else _as_int(raw_order)
        except (TypeError, ValueError):
            fields["order"] = "Order must be a whole number."
        else:
            if order < 1:
                fields["order"] = "Order must be at least 1."
            else:
                cleaned["order"] = order

    if "round_id" in data or not partial:
        try:
            cleaned["round_id"] = _as_int(data.get("round_id"))
        except (TypeError, ValueError):
            fields["roundId"] = "Round is required."

    if "description" in data:
        description = data.get("description")
        if description is not None and not isinstance(description, str):
            fields["description"] = "Description must be text."
        else:
            cleaned["description"] = (description or "").strip() or None

    if "is_visible_to_judges" in data:
        if not isinstance(data["is_visible_to_judges"], bool):
            fields["isVisibleToJudges"] = "Visibility must be true or false."
        else:
            cleaned["is_visible_to_judges"] = data["is_visible_to_judges"]

    if fields:
        raise ValidationError(fields)

    if "round_id" in cleaned and db.session.get(Round, cleaned["round_id"]) is None:
        raise NotFound("Round not found")

    return cleaned


def get_contestant(contestant_id):
    contestant = db.session.get(Contestant, contestant_id)
    if contestant is None:
        raise NotFound("Contestant not found")
    return contestant


def list_contestants_for_round(round_id):
    return (
        Contestant.query.filter_by(round_id=round_id)
        .order_by(Contestant.order.asc(), Contestant.id.asc())
        .all()
    )


def list_visible_contestants_for_round(round_id):
    return (
        Contestant.query.filter_by(round_id=round_id, is_visible_to_judges=True)
        .order_by(Contestant.order.asc(), Contestant.id.asc())
        .all()
    )


def list_all_contestants():
    return (
        Contestant.query.join(Round, Contestant.round_id == Round.id)
        .order_by(Round.round_number.asc(), Contestant.order.asc(), Contestant.id.asc())
        .all()
    )


def list_all_visible_contestants():
    # Deliberately not restricted to the active round: a contestant left
    # visible in an old round still shows up here.
    return (
        Contestant.query.join(Round, Contestant.round_id == Round.id)
        .filter(Contestant.is_visible_to_judges.is_(True))
        .order_by(Round.round_number.asc(), Contestant.order.asc(), Contestant.id.asc())
        .all()
    )


def create_contestant(**data):
    cleaned = _clean_fields(data, partial=False)
    contestant = Contestant(**cleaned)
    db.session.add(contestant)
    db.session.commit()
    current_app.logger.info(
        "Contestant %s created in round %s", contestant.id, contestant.round_id
    )
    return contestant


def update_contestant(contestant_id, **data):
    contestant = get_contestant(contestant_id)
    cleaned = _clean_fields(data, partial=True)
    for attr, value in cleaned.items():
        setattr(contestant, attr, value)
    db.session.commit()
    return contestant


def set_visibility(contestant_id, is_visible):
    if not isinstance(is_visible, bool):
        raise ValidationError({"isVisibleToJudges": "Visibility must be true or false."})

    contestant = get_contestant(contestant_id)
    contestant.is_visible_to_judges = is_visible
    db.session.commit()
    current_app.logger.info(
        "Contestant %s is now %s to judges",
        contestant.id,
        "visible" if is_visible else "hidden",
    )
    return contestant


def delete_contestant(contestant_id):
    """Remove a contestant and every vote cast for them in one transaction."""
    contestant = get_contestant(contestant_id)

    removed_votes = Vote.query.filter_by(contestant_id=contestant.id).delete(
        synchronize_session=False
    )
    db.session.expire(contestant, ["votes"])
    db.session.delete(contestant)
    db.session.commit()

    current_app.logger.info(
        "Contestant %s deleted along with %s vote(s)", contestant_id, removed_votes
    )
    return removed_votes
