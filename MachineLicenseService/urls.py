"""
URL configuration for MachineLicenseService project.
"""
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from core.views import HealthView, MetricsView, ServiceInfoView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", ServiceInfoView.as_view(), name="service-info"),
    # Health and metrics
    path("health", HealthView.as_view(), name="health"),
    path("metrics", MetricsView.as_view(), name="metrics"),
    # Client endpoints
    path("", include("api.v1.license.urls")),
    # OpenAPI Schema
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    # Swagger UI
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
]
