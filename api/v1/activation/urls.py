"""
URL configuration for activation server endpoints.
"""

from django.urls import path

from api.v1.activation import views

urlpatterns = [
    path(
        "insert",
        views.InsertLicenseView.as_view(),
        name="insert-license",
    ),
]
