"""
Django model discovery for the activations app.
"""
from activations.infrastructure.models import LicenseRegistration  # noqa: F401
