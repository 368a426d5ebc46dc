from django.http import HttpResponse
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def marketplace_prometheus_metrics(request):
    """
    Prometheus exposition of the default registry.

    Covers the order engine, product and service-error metrics as well as the
    authentication counters; both apps register on the same registry.
    """
    return HttpResponse(generate_latest(REGISTRY), content_type=CONTENT_TYPE_LATEST)
