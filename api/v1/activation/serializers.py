"""
Serializers for the activation server API.
"""

import base64
import binascii

from rest_framework import serializers


class InsertRegistrationSerializer(serializers.Serializer):
    """
    Serializer for an insert registration request.

    Field names follow the JSON body sent by the license issuer.
    """

    Signature = serializers.CharField(required=True, allow_blank=False, max_length=255)
    InstallLimit = serializers.IntegerField(required=False, default=0, min_value=0)
    UnlimitedInstalls = serializers.BooleanField(required=False, default=False)

    def validate_Signature(self, value):  # pylint: disable=invalid-name
        """Decode the base64 signature."""
        try:
            return base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise serializers.ValidationError("Signature must be base64") from e


class InsertRegistrationResponseSerializer(serializers.Serializer):
    """Serializer for InsertRegistrationResponseDTO."""

    signature = serializers.CharField()
    install_limit = serializers.IntegerField()
    unlimited_installs = serializers.BooleanField()
    created = serializers.BooleanField()
    message = serializers.CharField()
