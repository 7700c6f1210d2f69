from flask_login import current_user, login_required

from talentvote.errors import Forbidden, NotFound, ValidationError
from talentvote.routes.serializers import json_object, serialize_vote
from talentvote.services import contestants as contestant_service
from talentvote.services import ledger
from talentvote.services import rounds as round_service
from talentvote.services.security import admin_required, judge_required


def _ensure_open_for_voting(contestant_id):
    """Judges may only vote on visible contestants of the active round."""
    contestant = contestant_service.get_contestant(contestant_id)
    if not contestant.is_visible_to_judges:
        raise NotFound("Contestant not found")

    active_round = round_service.get_active_round()
    if active_round is None or active_round.id != contestant.round_id:
        raise ValidationError(
            {"contestantId": "Voting is not open for this contestant's round."}
        )
    return contestant


def register_vote_routes(app):
    @app.route("/api/votes", methods=["POST"])
    @login_required
    @judge_required
    def cast_vote():
        data = json_object()
        contestant_id = data.get("contestantId")
        value = data.get("vote")

        fields = {}
        if not isinstance(contestant_id, int) or isinstance(contestant_id, bool):
            fields["contestantId"] = "Contestant is required."
        if not isinstance(value, bool):
            fields["vote"] = "Vote must be true or false."
        if fields:
            raise ValidationError(fields)

        _ensure_open_for_voting(contestant_id)
        vote = ledger.cast_vote(current_user.id, contestant_id, value)
        return serialize_vote(vote)

    @app.route("/api/votes")
    @login_required
    @admin_required
    def all_votes():
        return [serialize_vote(vote) for vote in ledger.list_all_votes()]

    @app.route("/api/votes/user/<int:user_id>")
    @login_required
    def votes_by_user(user_id):
        if not current_user.is_admin and current_user.id != user_id:
            raise Forbidden()
        return [serialize_vote(vote) for vote in ledger.get_votes_by_judge(user_id)]

    @app.route("/api/votes/mine/<int:contestant_id>")
    @login_required
    def my_vote(contestant_id):
        vote = ledger.get_vote(current_user.id, contestant_id)
        return app.json.response(serialize_vote(vote))

    @app.route("/api/votes/contestant/<int:contestant_id>")
    @login_required
    @admin_required
    def votes_by_contestant(contestant_id):
        return [
            serialize_vote(vote) for vote in ledger.get_votes_by_contestant(contestant_id)
        ]

    @app.route("/api/votes/contestant/<int:contestant_id>", methods=["DELETE"])
    @login_required
    @admin_required
    def delete_votes_for_contestant(contestant_id):
        removed = ledger.delete_votes_for_contestant(contestant_id)
        return {"ok": True, "removedVotes": removed}
