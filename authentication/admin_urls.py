from django.urls import include, path
from rest_framework.routers import DefaultRouter

from authentication.api.views import UserAdminViewSet


app_name = "user_admin"

router = DefaultRouter()
router.register(r"users", UserAdminViewSet, basename="user")

urlpatterns = [
    path("", include(router.urls)),
]
