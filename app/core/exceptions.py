from typing import Any, Dict, Optional


class DashboardError(Exception):
    """Base class for errors the API boundary translates into status codes."""
    status_code = 500
    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

class MissingFieldError(DashboardError):
    status_code = 400
    code = "BAD_REQUEST"

class DuplicateEntryError(DashboardError):
    status_code = 409
    code = "CONFLICT"

class InvalidSortKeyError(DashboardError):
    status_code = 400
    code = "BAD_REQUEST"

class StoreFailure(DashboardError):
    """Raised by a store backend when the underlying storage fails.

    The message is shown to clients, so callers pass a generic one and keep
    the original exception as ``__cause__``.
    """
    status_code = 500
    code = "STORE_FAILURE"
