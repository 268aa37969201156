"""
RegisterLicenseHandler.

Handler for registering an issued license with the activation server.
"""

import logging
from typing import Tuple

from activations.application.commands.register_license import RegisterLicenseCommand
from activations.domain.registration import ServerCredentials, ServerResponse
from activations.infrastructure.activation_client import ActivationRegistrationClient
from core.domain.value_objects import InstallPolicy

logger = logging.getLogger(__name__)


class RegisterLicenseHandler:
    """Handler for RegisterLicenseCommand."""

    def __init__(self, client: ActivationRegistrationClient):
        """Initialize handler with the activation server client."""
        self.client = client

    @staticmethod
    def validate(command: RegisterLicenseCommand) -> Tuple[ServerCredentials, InstallPolicy]:
        """
        Check credentials first, then the install policy.

        Args:
            command: RegisterLicenseCommand

        Returns:
            Tuple of (credentials, install policy)

        Raises:
            MissingCredentials: If url, username or password is blank
            InvalidInstallPolicy: If no install limit is selected
        """
        credentials = ServerCredentials(command.server_url, command.username, command.password)
        install_policy = InstallPolicy(
            install_limit=command.install_limit,
            unlimited_installs=command.unlimited_installs,
        )
        return credentials, install_policy

    async def handle(self, command: RegisterLicenseCommand) -> ServerResponse:
        """
        Handle register license command.

        Args:
            command: RegisterLicenseCommand

        Returns:
            ServerResponse from the activation server

        Raises:
            ValidationFailure: If the command is incomplete
            RegistrationTransportFailure: If the server cannot be reached
        """
        credentials, install_policy = self.validate(command)

        response = await self.client.register(
            server_url=credentials.server_url,
            username=credentials.username,
            password=credentials.password,
            signature=command.signature,
            install_policy=install_policy,
        )

        if not response.ok:
            logger.warning("Activation server rejected registration: HTTP %s", response.status_code)
        return response
