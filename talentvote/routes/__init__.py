from talentvote.routes.admin import register_admin_routes
from talentvote.routes.auth import register_auth_routes
from talentvote.routes.contestants import register_contestant_routes
from talentvote.routes.rounds import register_round_routes
from talentvote.routes.votes import register_vote_routes


def register_routes(app):
    register_auth_routes(app)
    register_round_routes(app)
    register_contestant_routes(app)
    register_vote_routes(app)
    register_admin_routes(app)
