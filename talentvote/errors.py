from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException

from talentvote.extensions import db


class TalentVoteError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class NotFound(TalentVoteError):
    status_code = 404
    message = "Not found"


class ValidationError(TalentVoteError):
    """Rejected input. ``fields`` maps field names to messages."""

    status_code = 400
    message = "Invalid input"

    def __init__(self, fields, message=None):
        super().__init__(message)
        self.fields = dict(fields)


class Forbidden(TalentVoteError):
    status_code = 403
    message = "Access denied"


class Conflict(TalentVoteError):
    """A uniqueness rule the store should never see broken was broken.

    This is a bug in the caller, not bad user input, so clients only ever
    get a generic internal error for it.
    """

    status_code = 500


def register_error_handlers(app):
    @app.errorhandler(TalentVoteError)
    def handle_talentvote_error(error):
        db.session.rollback()

        if isinstance(error, Conflict):
            current_app.logger.error("Consistency violation: %s", error.message)
            return jsonify({"ok": False, "error": "Internal server error"}), 500

        body = {"ok": False, "error": error.message}
        if isinstance(error, ValidationError):
            body["fields"] = error.fields
        return jsonify(body), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"ok": False, "error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        current_app.logger.exception("Unhandled error: %s", error)
        return jsonify({"ok": False, "error": "Internal server error"}), 500
