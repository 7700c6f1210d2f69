from flask_login import login_required

from talentvote.routes.serializers import json_object, serialize_round
from talentvote.services import rounds as round_service
from talentvote.services.security import admin_required


def register_round_routes(app):
    @app.route("/api/rounds")
    @login_required
    def list_rounds():
        return [serialize_round(round_) for round_ in round_service.list_rounds()]

    @app.route("/api/rounds/active")
    @login_required
    def active_round():
        # Flask refuses to serialise a bare None, so wrap it explicitly.
        return app.json.response(serialize_round(round_service.get_active_round()))

    @app.route("/api/rounds", methods=["POST"])
    @login_required
    @admin_required
    def create_round():
        data = json_object()
        round_ = round_service.create_round(
            name=data.get("name"),
            round_number=data.get("roundNumber"),
            description=data.get("description"),
        )
        return serialize_round(round_), 201

    @app.route("/api/rounds/<int:round_id>", methods=["PUT"])
    @login_required
    @admin_required
    def update_round(round_id):
        data = json_object()
        round_ = round_service.update_round(
            round_id,
            name=data.get("name"),
            description=data.get("description"),
            round_number=data.get("roundNumber"),
        )
        return serialize_round(round_)

    @app.route("/api/rounds/<int:round_id>/activate", methods=["PUT"])
    @login_required
    @admin_required
    def activate_round(round_id):
        round_ = round_service.activate_round(round_id)
        return {"ok": True, "round": serialize_round(round_)}

    @app.route("/api/rounds/deactivate", methods=["PUT"])
    @login_required
    @admin_required
    def deactivate_rounds():
        round_service.deactivate_all_rounds()
        return {"ok": True}
