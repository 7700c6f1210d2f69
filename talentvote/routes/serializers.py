from flask import request

from talentvote.errors import ValidationError


def json_object():
    """Return the request's JSON body, which must be an object when present."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError({"body": "Request body must be a JSON object."})
    return data


def _timestamp(value):
    return value.isoformat() if value is not None else None


def serialize_user(user):
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "createdAt": _timestamp(user.created_at),
    }


def serialize_round(round_):
    if round_ is None:
        return None
    return {
        "id": round_.id,
        "name": round_.name,
        "description": round_.description,
        "roundNumber": round_.round_number,
        "isActive": round_.is_active,
        "createdAt": _timestamp(round_.created_at),
    }


def serialize_contestant(contestant):
    return {
        "id": contestant.id,
        "name": contestant.name,
        "className": contestant.class_name,
        "age": contestant.age,
        "category": contestant.category,
        "description": contestant.description,
        "roundId": contestant.round_id,
        "order": contestant.order,
        "isVisibleToJudges": contestant.is_visible_to_judges,
        "createdAt": _timestamp(contestant.created_at),
    }


def serialize_vote(vote):
    if vote is None:
        return None
    return {
        "id": vote.id,
        "userId": vote.user_id,
        "contestantId": vote.contestant_id,
        "vote": vote.vote,
        "createdAt": _timestamp(vote.created_at),
    }


def serialize_tally(tally):
    return {
        "positiveCount": tally["positive_count"],
        "negativeCount": tally["negative_count"],
        "totalVotesCast": tally["total_votes_cast"],
        "approvalPercentage": tally["approval_percentage"],
    }


def serialize_round_summary(summary):
    contestants = []
    for row in summary["contestants"]:
        contestants.append(
            {
                "contestant": serialize_contestant(row["contestant"]),
                "results": serialize_tally(row),
                "judgeVotes": [
                    {
                        "judgeId": entry["judge"].id,
                        "judgeName": entry["judge"].name,
                        "vote": entry["vote"],
                    }
                    for entry in row["judge_votes"]
                ],
            }
        )

    return {
        "round": serialize_round(summary["round"]),
        "totalJudges": summary["total_judges"],
        "includeHidden": summary["include_hidden"],
        "contestants": contestants,
    }


def serialize_setting(setting):
    return {
        "id": setting.id,
        "key": setting.key,
        "value": setting.value,
        "updatedAt": _timestamp(setting.updated_at),
    }
