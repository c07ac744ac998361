"""
Service-level errors. Each carries the HTTP status the API layer answers
with; api.errors turns them into {"error": message} responses.
"""
from __future__ import annotations


class ServiceError(Exception):
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid input"


class BadRequestError(ValidationError):
    default_message = "Bad request"


class ChirpTooLongError(ValidationError):
    default_message = "Chirp is too long"


class UnauthorizedError(ServiceError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(ServiceError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(ServiceError):
    # unique-constraint violations are reported as server errors
    status_code = 500
    default_message = "Conflict"


class PersistenceError(ServiceError):
    status_code = 500
    default_message = "Database error"
