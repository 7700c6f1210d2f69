from flask_login import current_user, login_required

from talentvote.errors import NotFound
from talentvote.routes.serializers import json_object, serialize_contestant
from talentvote.services import contestants as contestant_service
from talentvote.services.security import admin_required

# JSON field name -> model attribute
CONTESTANT_FIELDS = {
    "name": "name",
    "className": "class_name",
    "age": "age",
    "category": "category",
    "description": "description",
    "roundId": "round_id",
    "order": "order",
    "isVisibleToJudges": "is_visible_to_judges",
}


def _contestant_payload():
    data = json_object()
    return {attr: data[key] for key, attr in CONTESTANT_FIELDS.items() if key in data}


def register_contestant_routes(app):
    @app.route("/api/contestants/round/<int:round_id>")
    @login_required
    def contestants_by_round(round_id):
        if current_user.is_admin:
            contestants = contestant_service.list_contestants_for_round(round_id)
        else:
            contestants = contestant_service.list_visible_contestants_for_round(round_id)
        return [serialize_contestant(contestant) for contestant in contestants]

    @app.route("/api/contestants/all")
    @login_required
    @admin_required
    def all_contestants():
        return [
            serialize_contestant(contestant)
            for contestant in contestant_service.list_all_contestants()
        ]

    @app.route("/api/contestants/visible")
    @login_required
    def visible_contestants():
        return [
            serialize_contestant(contestant)
            for contestant in contestant_service.list_all_visible_contestants()
        ]

    @app.route("/api/contestants/visible/<int:round_id>")
    @login_required
    def visible_contestants_for_round(round_id):
        return [
            serialize_contestant(contestant)
            for contestant in contestant_service.list_visible_contestants_for_round(round_id)
        ]

    @app.route("/api/contestants/<int:contestant_id>")
    @login_required
    def contestant_detail(contestant_id):
        contestant = contestant_service.get_contestant(contestant_id)
        if not current_user.is_admin and not contestant.is_visible_to_judges:
            raise NotFound("Contestant not found")
        return serialize_contestant(contestant)

    @app.route("/api/contestants", methods=["POST"])
    @login_required
    @admin_required
    def create_contestant():
        contestant = contestant_service.create_contestant(**_contestant_payload())
        return serialize_contestant(contestant), 201

    @app.route("/api/contestants/<int:contestant_id>", methods=["PUT"])
    @login_required
    @admin_required
    def update_contestant(contestant_id):
        contestant = contestant_service.update_contestant(
            contestant_id, **_contestant_payload()
        )
        return serialize_contestant(contestant)

    @app.route("/api/contestants/<int:contestant_id>/visibility", methods=["PUT"])
    @login_required
    @admin_required
    def set_contestant_visibility(contestant_id):
        data = json_object()
        contestant = contestant_service.set_visibility(
            contestant_id, data.get("isVisibleToJudges")
        )
        return serialize_contestant(contestant)

    @app.route("/api/contestants/<int:contestant_id>", methods=["DELETE"])
    @login_required
    @admin_required
    def delete_contestant(contestant_id):
        removed_votes = contestant_service.delete_contestant(contestant_id)
        return {"ok": True, "removedVotes": removed_votes}
