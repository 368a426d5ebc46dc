from .auth_serializers import (
    AdminUserCreateSerializer,
    AdminUserUpdateSerializer,
    LoginSerializer,
    SignupSerializer,
    UserSerializer,
)
from .jwt_serializers import CustomRefreshToken


__all__ = [
    "UserSerializer",
    "SignupSerializer",
    "LoginSerializer",
    "AdminUserCreateSerializer",
    "AdminUserUpdateSerializer",
    "CustomRefreshToken",
]
