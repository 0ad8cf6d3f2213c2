from django.http import HttpResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def prometheus_metrics(request):
    """
    Exposes every registered Prometheus metric (all apps share the default registry).
    """
    return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
