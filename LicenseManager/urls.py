"""
URL configuration for LicenseManager project.
"""
from django.contrib import admin
from django.urls import include, path

from core.views import HealthDBView, HealthView

urlpatterns = [
    path("admin/", admin.site.urls),
    # Health check endpoints
    path("health/", HealthView.as_view(), name="health"),
    path("health/db/", HealthDBView.as_view(), name="health-db"),
    # Activation server endpoints
    path("", include("api.v1.activation.urls")),
]
