from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError
import logging

from services.errors import ServiceError

logger = logging.getLogger(__name__)


def error_response(message: str, status: int, details: dict | None = None):
    payload = {"error": message}
    if details:
        payload["details"] = details
    return jsonify(payload), status


def register_error_handlers(app):
    # Service errors carry their own status
    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        if err.status_code >= 500:
            logger.error("%s: %s", err.__class__.__name__, err.message, exc_info=err)
        return error_response(err.message, err.status_code)

    # Marshmallow validation errors map to 400
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        # err.messages contains field-level details
        return error_response("Invalid input", 400, details=err.messages)

    # Integrity errors that escaped a service (unique constraints, FK violations)
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        logger.error("Integrity error", exc_info=err)
        details = None
        if current_app and current_app.debug:
            details = {"db_error": str(getattr(err, "orig", err))}
        return error_response("Something went wrong", 500, details=details)

    # Werkzeug HTTPExceptions map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return error_response(err.description, err.code or 400)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        logger.exception("Unhandled exception", exc_info=err)
        details = None
        # In dev, include exception details to speed up debugging
        if current_app and current_app.debug:
            details = {"type": err.__class__.__name__, "message": str(err)}
        return error_response("Something went wrong", 500, details=details)
