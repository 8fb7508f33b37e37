# app/exceptions.py
"""
Error types raised by the route handlers.

Every error carries a kind, a message and the HTTP status it maps to. They are
rendered in one place (app.main.register_exception_handlers), so routes only
ever raise them.
"""

from typing import Any, Dict, Optional


class ApiError(Exception):
    kind = "api_error"
    status_code = 500

    def __init__(self, message: str = "An unexpected error occurred", status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "kind": self.kind,
                "message": self.message,
                "status": self.status_code,
            }
        }


class ValidationError(ApiError):
    """Required input missing or empty (400)."""

    kind = "validation_error"
    status_code = 400


class NotFoundError(ApiError):
    """No row matches the key in the path (404)."""

    kind = "not_found"
    status_code = 404

    def __init__(self, resource: str, key: Any):
        super().__init__(f"{resource} '{key}' not found")
        self.resource = resource
        self.key = key


class StorageError(ApiError):
    """
    The database rejected or failed a statement (constraint violation, lost
    connection, ...). The underlying error is logged, never returned.
    """

    kind = "storage_error"
    status_code = 500

    def __init__(self, message: str = "A database error occurred"):
        super().__init__(message)


def is_present(value: Any) -> bool:
    """
    Presence check used for request bodies: None, "" and 0 all count as missing.
    """
    return value is not None and bool(value)


def require_fields(body: Dict[str, Any], *fields: str, message: str) -> None:
    missing = [f for f in fields if not is_present(body.get(f))]
    if missing:
        raise ValidationError(message)
