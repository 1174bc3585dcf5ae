from flask import jsonify, g, current_app
from werkzeug.exceptions import HTTPException


class PollError(Exception):
    """Base of every failure the poll operations report to the request layer."""

    code = "POLL_ERROR"
    status = 400

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationFailed(PollError):
    """Missing or empty required text, or a malformed id. Raised before any store access."""

    code = "VALIDATION_ERROR"
    status = 400


class NotFound(PollError):
    """A question or option id does not resolve. Nothing was mutated."""

    code = "NOT_FOUND"
    status = 404


class Forbidden(PollError):
    """Deletion blocked by a nonzero vote count. Nothing was mutated."""

    code = "FORBIDDEN"
    status = 403


class StoreFailure(PollError):
    """The store was unreachable or rejected a step. Earlier steps are not rolled back."""

    code = "STORE_FAILURE"
    status = 500


def _payload(code: str, message: str, details=None, status=400):
    return (
        jsonify({
            "success": False,
            "error": {
                "code": code,
                "message": message,
                "details": details or None,
            },
            "request_id": getattr(g, "request_id", None),
        }),
        status,
    )


def register_error_handlers(app):
    @app.errorhandler(PollError)
    def handle_poll_error(e: PollError):
        if e.status >= 500:
            current_app.logger.error(
                "%s request_id=%s: %s", e.code, getattr(g, "request_id", None), e.message
            )
        return _payload(code=e.code, message=e.message, details=e.details, status=e.status)

    # Generic HTTP errors (404, 405, etc.)
    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        desc = e.description

        if isinstance(desc, dict):
            code = desc.get("code") or e.name.replace(" ", "_").upper()
            message = desc.get("message") or e.name
            details = desc.get("errors") or desc.get("details")
            return _payload(code=code, message=message, details=details, status=e.code or 400)

        return _payload(
            code=e.name.replace(" ", "_").upper(),
            message=desc or e.name,
            details=None,
            status=e.code or 400
        )

    @app.errorhandler(404)
    def handle_404(_):
        return _payload("NOT_FOUND", "Resource not found", status=404)

    @app.errorhandler(500)
    def handle_500(e):
        # Don't leak internals
        current_app.logger.error(
            "Unhandled exception request_id=%s", getattr(g, "request_id", None),
            exc_info=getattr(e, "original_exception", None) or e,
        )
        return _payload("INTERNAL_SERVER_ERROR", "An unexpected error occurred", status=500)
