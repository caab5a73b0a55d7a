"""
Error taxonomy shared by services and the HTTP layer.

Services raise these; the handlers registered in main.py turn them into the
`{success: false, message, code}` envelope with the matching status code.
"""
from enum import Enum
from typing import Any, Dict, List, Optional


class SahayaError(Exception):
    """Base class for every error the API reports deliberately."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "message": self.message, "code": self.code}
        body.update(self.details)
        return body


class NotFoundError(SahayaError):
    status_code = 404
    code = "NOT_FOUND"


class ValidationFailed(SahayaError):
    """A required field is missing or an enum value is not allowed."""

    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None):
        self.errors = errors or []
        super().__init__(message, {"errors": self.errors})


class ConflictError(SahayaError):
    status_code = 409
    code = "CONFLICT"


class AuthErrorKind(str, Enum):
    MISSING = "MISSING"
    EXPIRED = "EXPIRED"
    INVALID = "INVALID"


AUTH_ERROR_MESSAGES = {
    AuthErrorKind.MISSING: "No token provided. Authorization required.",
    AuthErrorKind.EXPIRED: "Token expired. Please login again.",
    AuthErrorKind.INVALID: "Invalid token. Authorization failed.",
}


class AuthenticationError(SahayaError):
    status_code = 401
    code = "AUTH_FAILED"

    def __init__(self, kind: AuthErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.code = f"TOKEN_{kind.value}"
        super().__init__(message or AUTH_ERROR_MESSAGES[kind])


class AuthorizationError(SahayaError):
    status_code = 403
    code = "FORBIDDEN"

    def __init__(self, message: str = "Access denied. Insufficient permissions."):
        super().__init__(message)
