"""
URL configuration for the codemartBackend project.
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from marketplace.api.views.prometheus_metrics import prometheus_metrics


urlpatterns = [
    path("admin/", admin.site.urls),
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    # API endpoints
    path("api/auth/", include("authentication.urls")),
    path("api/marketplace/", include("marketplace.urls", namespace="marketplace")),
    path("api/payments/", include("payment_system.urls", namespace="payment_system")),
    path("api/support/", include("support.urls", namespace="support")),
    path("api/dashboards/", include("dashboards.urls", namespace="dashboards")),
    # Prometheus scrape endpoint
    path("metrics/", prometheus_metrics, name="prometheus-metrics"),
]

urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
