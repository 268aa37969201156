"""
Pytest configuration and shared fixtures.
"""

from datetime import date

import pytest
import requests

from core.domain.value_objects import Passphrase
from licenses.domain.license import LicenseFields
from licenses.domain.services import LicenseSigner
from licenses.infrastructure.xml_codec import XmlLicenseDocumentCodec
from signing.domain.key_pair import KeyPairGenerator
from signing.domain.private_key_cipher import PrivateKeyCipher

PASSPHRASE = "abc123"


class FakeResponse:
    """Stand-in for requests.Response."""

    def __init__(self, status_code: int, text: str):
        self.status_code = status_code
        self.text = text


class FakeActivationServer:
    """Records requests.post calls and answers them."""

    def __init__(self):
        self.calls = []
        self.response = FakeResponse(201, '{"message": "License added"}')
        self.error = None

    def respond(self, status_code: int, text: str):
        """Answer every request with the given status and body."""
        self.response = FakeResponse(status_code, text)

    def fail(self, error: Exception):
        """Raise error for every request."""
        self.error = error

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def activation_server(monkeypatch):
    """Fixture replacing requests.post with a fake activation server."""
    server = FakeActivationServer()
    monkeypatch.setattr(requests, "post", server.post)
    return server


@pytest.fixture
def cipher():
    """Fixture for a PrivateKeyCipher with cheap key derivation."""
    return PrivateKeyCipher(iterations=1000)


@pytest.fixture
def key_pair_generator(cipher):
    """Fixture for KeyPairGenerator."""
    return KeyPairGenerator(cipher)


@pytest.fixture
def exported_key_pair(key_pair_generator):
    """Fixture for a key pair exported under PASSPHRASE."""
    return key_pair_generator.generate_exported(Passphrase(PASSPHRASE), Passphrase(PASSPHRASE))


@pytest.fixture
def codec():
    """Fixture for the XML license codec."""
    return XmlLicenseDocumentCodec()


@pytest.fixture
def signer(codec, cipher):
    """Fixture for LicenseSigner."""
    return LicenseSigner(codec, cipher)


@pytest.fixture
def license_fields():
    """Fixture for complete license fields."""
    return LicenseFields(
        licensee_name="Jane Doe",
        licensee_email="jane@example.com",
        expires_at=date(2030, 1, 1),
    )


@pytest.fixture
def signed_license(signer, license_fields, exported_key_pair):
    """Fixture for a License signed with exported_key_pair."""
    return signer.sign(license_fields, exported_key_pair.private_key, PASSPHRASE)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
