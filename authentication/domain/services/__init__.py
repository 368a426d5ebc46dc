"""
Business logic services for authentication.

Services encapsulate the account rules and are called by the API views.
"""

from .auth_service import AuthService
from .results import AuthErrorCodes, LoginResult, RegisterResult, Result
from .user_service import UserService


__all__ = [
    "AuthService",
    "UserService",
    "AuthErrorCodes",
    "LoginResult",
    "RegisterResult",
    "Result",
]
