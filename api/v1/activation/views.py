"""
Activation server API views.

The license issuer registers every signed license here together with
its install policy.
"""

import logging

from asgiref.sync import async_to_sync
from rest_framework import status
from rest_framework.authentication import BasicAuthentication
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.insert_registration import InsertRegistrationCommand
from activations.application.handlers.insert_registration_handler import (
    InsertRegistrationHandler,
)
from activations.infrastructure.repositories.django_registration_repository import (
    DjangoRegistrationRepository,
)
from api.v1.activation.serializers import (
    InsertRegistrationSerializer,
    InsertRegistrationResponseSerializer,
)

logger = logging.getLogger(__name__)

_registration_repo = DjangoRegistrationRepository()


class InsertLicenseView(APIView):
    """View for registering a license signature and install policy."""

    authentication_classes = [BasicAuthentication]
    permission_classes = [IsAuthenticated]

    def post(self, request: Request) -> Response:
        """Insert or update a license registration."""
        return async_to_sync(self._handle_insert)(request)

    async def _handle_insert(self, request: Request) -> Response:
        """Async handler for insert registration."""
        serializer = InsertRegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            logger.info("Rejected registration from %s: %s", request.user, serializer.errors)
            return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        handler = InsertRegistrationHandler(registration_repository=_registration_repo)
        command = InsertRegistrationCommand(
            signature=serializer.validated_data["Signature"],
            install_limit=serializer.validated_data["InstallLimit"],
            unlimited_installs=serializer.validated_data["UnlimitedInstalls"],
            registered_by=request.user.get_username(),
        )

        result = await handler.handle(command)

        return Response(
            InsertRegistrationResponseSerializer(result).data,
            status=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK,
        )
