"""
URL configuration for bazaarBackend project.

All API endpoints live under /api/. Interactive documentation is generated
by drf-spectacular from the viewset annotations.
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from authentication.api.views.health_views import health_live, health_ready
from marketplace.api.views.prometheus_metrics import marketplace_prometheus_metrics

urlpatterns = [
    path("admin/", admin.site.urls),
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    # API endpoints
    path("api/auth/", include("authentication.urls")),
    path("api/admin/", include("authentication.admin_urls")),
    path("api/", include("marketplace.urls")),
    # Operations
    path("api/metrics/", marketplace_prometheus_metrics, name="metrics"),
    path("api/health/live/", health_live, name="health-live"),
    path("api/health/ready/", health_ready, name="health-ready"),
]
