from flask import request
from flask_login import current_user, login_required

from talentvote.models.user import ROLES
from talentvote.routes.serializers import (
    json_object,
    serialize_contestant,
    serialize_round_summary,
    serialize_setting,
    serialize_tally,
    serialize_user,
)
from talentvote.services import results as results_service
from talentvote.services import settings as settings_service
from talentvote.services import users as user_service
from talentvote.services.security import admin_required


def _flag(raw):
    return (raw or "").strip().lower() in ("1", "true", "yes", "on")


def register_admin_routes(app):
    @app.route("/api/results/contestant/<int:contestant_id>")
    @login_required
    @admin_required
    def contestant_results(contestant_id):
        result = results_service.compute_contestant_results(contestant_id)
        return {
            "contestant": serialize_contestant(result["contestant"]),
            "results": serialize_tally(result),
        }

    @app.route("/api/results/round/<int:round_id>")
    @login_required
    @admin_required
    def round_results(round_id):
        summary = results_service.compute_round_summary(
            round_id, include_hidden=_flag(request.args.get("includeHidden"))
        )
        return serialize_round_summary(summary)

    @app.route("/api/stats")
    @login_required
    @admin_required
    def voting_stats():
        stats = results_service.get_voting_stats()
        return {
            "totalVotes": stats["total_votes"],
            "activeJudges": stats["active_judges"],
            "totalContestants": stats["total_contestants"],
            "currentRound": stats["current_round"],
            "totalRounds": stats["total_rounds"],
        }

    @app.route("/api/users")
    @login_required
    @admin_required
    def list_users():
        role = request.args.get("role")
        if role not in ROLES:
            role = None
        return [serialize_user(user) for user in user_service.list_users(role=role)]

    @app.route("/api/users/<int:user_id>", methods=["PUT"])
    @login_required
    @admin_required
    def update_user(user_id):
        data = json_object()
        user = user_service.update_user(
            user_id,
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password") or None,
            role=data.get("role"),
        )
        return serialize_user(user)

    @app.route("/api/users/<int:user_id>", methods=["DELETE"])
    @login_required
    @admin_required
    def delete_user(user_id):
        removed_votes = user_service.delete_user(user_id, acting_user_id=current_user.id)
        return {"ok": True, "removedVotes": removed_votes}

    @app.route("/api/settings/<key>")
    @login_required
    @admin_required
    def get_setting(key):
        return serialize_setting(settings_service.get_setting(key))

    @app.route("/api/settings", methods=["POST"])
    @login_required
    @admin_required
    def set_setting():
        data = json_object()
        setting = settings_service.set_setting(data.get("key"), data.get("value"))
        return serialize_setting(setting)
