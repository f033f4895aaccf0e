"""
Error taxonomy shared by the services and the routers.

Services raise these; routers decide how each one is shown to the client
(an inline form message, a ``{"success": false}`` JSON body, or a plain
status page).  ``status_code`` is the HTTP status a JSON endpoint should
answer with.
"""
from enum import Enum


class BlogError(Exception):
    status_code: int = 500

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ValidationError(BlogError):
    """Client-correctable input problem."""

    status_code = 400

    MISSING_FIELDS = "missing_fields"
    UNKNOWN_CATEGORY = "unknown_category"


class AuthFailure(str, Enum):
    STORE_FAILURE = "store_failure"
    EMAIL_NOT_FOUND = "email_not_found"
    BAD_PASSWORD = "bad_password"


class AuthError(BlogError):
    status_code = 400

    def __init__(self, reason: AuthFailure, message: str) -> None:
        super().__init__(message, code=reason.value)
        self.reason = reason


class NotFoundError(BlogError):
    status_code = 404


class StoreError(BlogError):
    """Infrastructure failure while talking to the database."""

    status_code = 500


class UploadError(BlogError):
    status_code = 400

    NO_FILE = "no_file"
    UNSUPPORTED_TYPE = "unsupported_type"
    TOO_LARGE = "too_large"


class LoginRequired(Exception):
    """Raised by the auth gate; the app turns it into a redirect to /login."""
