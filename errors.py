import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from extensions import db

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors reported to the client as ``{"success": false, "message": ...}``."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None, payload=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.payload = payload or {}

    def to_dict(self):
        body = {"success": False, "message": self.message}
        body.update(self.payload)
        return body


#-------------------------------------------------------
# 400
class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid request"


class MissingField(ValidationError):
    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(f"Missing required field(s): {', '.join(self.fields)}")


class TooLong(ValidationError):
    def __init__(self, field, max_length):
        super().__init__(f"{field} must be {max_length} characters or less")


class InvalidEnum(ValidationError):
    def __init__(self, field, allowed):
        self.allowed = list(allowed)
        super().__init__(
            f"{field} must be one of: {', '.join(self.allowed)}",
            payload={"allowed": self.allowed},
        )


class InvalidDate(ValidationError):
    def __init__(self, field, fmt="YYYY-MM-DD"):
        super().__init__(f"{field} must be a valid date in {fmt} format")


class InvalidDateRange(ValidationError):
    default_message = "end_date must be on or after start_date"


class DateNotFuture(ValidationError):
    def __init__(self, field):
        super().__init__(f"{field} must be in the future")


class ActivityFull(ApiError):
    status_code = 400

    def __init__(self, current, maximum):
        super().__init__(
            f"Activity is full ({current}/{maximum})",
            payload={"current": current, "max": maximum},
        )


#-------------------------------------------------------
# 401 / 403 / 404 / 409
class Unauthenticated(ApiError):
    status_code = 401
    default_message = "Authentication required"


class Forbidden(ApiError):
    status_code = 403
    default_message = "You do not have permission to access this resource"


class NotFound(ApiError):
    status_code = 404
    default_message = "Resource not found"


class NotAssignedToRoom(NotFound):
    default_message = "Student is not assigned to a room"


class Conflict(ApiError):
    status_code = 409
    default_message = "Resource already exists"


class AlreadySubscribed(Conflict):
    default_message = "Already subscribed"


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(err):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        # 404/405 của Flask cũng trả về cùng một định dạng
        return jsonify({"success": False, "message": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err):
        db.session.rollback()
        logger.exception("Unhandled error: %s", err)
        return jsonify({"success": False, "message": "Internal server error"}), 500
