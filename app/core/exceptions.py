# app/core/exceptions.py
# Domain errors raised by the services layer.
# Rendered into the JSON error envelope by the handlers in app/main.py:
#   {"success": false, "error": {"message": ..., "status": ..., "details": ...}}

from typing import Any, List, Optional


class ServiceError(Exception):
    """Base class for every error this service reports to clients."""

    status_code = 500
    default_message = "An error occurred while processing your request."

    def __init__(self, message: Optional[str] = None, details: Optional[List[Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        error = {"message": self.message, "status": self.status_code}
        if self.details:
            error["details"] = self.details
        return error


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Validation failed"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Resource not found"


class DuplicateFollowError(ServiceError):
    status_code = 400
    default_message = "Already following this user"


class InvalidFollowError(ServiceError):
    status_code = 400
    default_message = "Cannot follow yourself"


class StoreError(ServiceError):
    """Unclassified failure reported by the database. Message is forwarded as-is."""

    status_code = 500
    default_message = "Database error"
