from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import OrderViewSet, ProductViewSet, SellerViewSet

# Create the main router
router = DefaultRouter()
router.register(r"products", ProductViewSet, basename="product")
router.register(r"sellers", SellerViewSet, basename="seller")
router.register(r"orders", OrderViewSet, basename="order")

app_name = "marketplace"

urlpatterns = [
    path("", include(router.urls)),
]
