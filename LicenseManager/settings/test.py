"""
Test settings for LicenseManager.
"""

from .base import *  # noqa: F403, F401

DEBUG = False

# Use in-memory SQLite for faster tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Cheap key derivation for tests
PRIVATE_KEY_KDF_ITERATIONS = 1000

# Never talk to a real activation server from tests
ACTIVATION_SERVER_URL = ""
ACTIVATION_SERVER_USERNAME = ""

# Disable logging during tests
LOGGING_CONFIG = None
