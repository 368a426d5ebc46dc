from .auth_views import LoginAPIView, ProfileAPIView, SignupAPIView
from .user_views import UserAdminViewSet


__all__ = [
    "LoginAPIView",
    "SignupAPIView",
    "ProfileAPIView",
    "UserAdminViewSet",
]
