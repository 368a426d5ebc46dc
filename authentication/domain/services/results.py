"""
Result objects for the authentication service layer.

Dataclasses returned by service methods instead of mixed tuples or dicts.
``error_code`` carries the machine-readable failure kind the views map to an
HTTP status; ``error`` is the human-readable message.
"""

from dataclasses import dataclass
from typing import Any, Optional


class AuthErrorCodes:
    """Error codes produced by the authentication services."""

    MALFORMED_REQUEST = "malformed_request"
    CONFLICT = "conflict"
    INVALID_CREDENTIALS = "invalid_credentials"
    USER_NOT_FOUND = "user_not_found"
    INTERNAL_ERROR = "internal_error"


@dataclass
class LoginResult:
    """Result of login attempt."""

    success: bool
    user: Optional[Any] = None  # CustomUser instance
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    message: Optional[str] = None


@dataclass
class RegisterResult:
    """Result of a signup attempt; a successful signup is logged in right away."""

    success: bool
    user: Optional[Any] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    message: Optional[str] = None


@dataclass
class Result:
    """Generic result for simple operations."""

    success: bool
    message: str = ""
    data: Optional[Any] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
