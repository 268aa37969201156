"""
Integration tests for the activation server insert endpoint.
"""

import base64

import pytest
from django.urls import reverse

from activations.infrastructure.models import LicenseRegistration


@pytest.fixture
def issuer(django_user_model):
    """Fixture for the user that registers licenses."""
    return django_user_model.objects.create_user(username="issuer", password="secret")


def basic_auth(username, password):
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


@pytest.mark.django_db
@pytest.mark.integration
class TestInsertAPI:
    """Integration tests for POST /insert."""

    def test_insert_new_license(self, api_client, issuer):
        """Test a new registration is stored."""
        api_client.credentials(HTTP_AUTHORIZATION=basic_auth("issuer", "secret"))
        response = api_client.post(
            reverse("insert-license"),
            {"Signature": "AQID", "InstallLimit": 3, "UnlimitedInstalls": False},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "License added"
        assert data["created"] is True

        registration = LicenseRegistration.objects.get(signature="AQID")
        assert registration.install_limit == 3
        assert registration.unlimited_installs is False
        assert registration.registered_by == "issuer"

    def test_insert_existing_license_updates(self, api_client, issuer):
        """Test registering the same signature again updates the policy."""
        api_client.credentials(HTTP_AUTHORIZATION=basic_auth("issuer", "secret"))
        url = reverse("insert-license")
        api_client.post(url, {"Signature": "AQID", "InstallLimit": 3}, format="json")

        response = api_client.post(
            url, {"Signature": "AQID", "UnlimitedInstalls": True}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["message"] == "License updated"
        assert LicenseRegistration.objects.count() == 1
        registration = LicenseRegistration.objects.get(signature="AQID")
        assert registration.unlimited_installs is True
        assert registration.install_limit == 0

    def test_missing_credentials(self, api_client):
        """Test anonymous requests are rejected."""
        response = api_client.post(
            reverse("insert-license"),
            {"Signature": "AQID", "InstallLimit": 3},
            format="json",
        )
        assert response.status_code == 401
        assert LicenseRegistration.objects.count() == 0

    def test_wrong_password(self, api_client, issuer):
        """Test wrong credentials are rejected."""
        api_client.credentials(HTTP_AUTHORIZATION=basic_auth("issuer", "wrong"))
        response = api_client.post(
            reverse("insert-license"),
            {"Signature": "AQID", "InstallLimit": 3},
            format="json",
        )
        assert response.status_code == 401

    def test_no_install_limit(self, api_client, issuer):
        """Test zero limit without unlimited installs is rejected."""
        api_client.credentials(HTTP_AUTHORIZATION=basic_auth("issuer", "secret"))
        response = api_client.post(
            reverse("insert-license"),
            {"Signature": "AQID", "InstallLimit": 0, "UnlimitedInstalls": False},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INSTALL_POLICY"
        assert LicenseRegistration.objects.count() == 0

    @pytest.mark.parametrize(
        "body",
        [
            {"InstallLimit": 3},
            {"Signature": "", "InstallLimit": 3},
            {"Signature": "not base64!", "InstallLimit": 3},
            {"Signature": "AQID", "InstallLimit": -1},
        ],
    )
    def test_invalid_body(self, api_client, issuer, body):
        """Test request validation."""
        api_client.credentials(HTTP_AUTHORIZATION=basic_auth("issuer", "secret"))
        response = api_client.post(reverse("insert-license"), body, format="json")

        assert response.status_code == 400
        assert "error" in response.json()
        assert LicenseRegistration.objects.count() == 0


@pytest.mark.django_db
@pytest.mark.integration
class TestHealthAPI:
    """Integration tests for health endpoints."""

    def test_health(self, client):
        """Test service health endpoint."""
        response = client.get(reverse("health"))
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_health_db(self, client):
        """Test database health endpoint."""
        response = client.get(reverse("health-db"))
        assert response.status_code == 200
        assert response.json()["database"] == "connected"
