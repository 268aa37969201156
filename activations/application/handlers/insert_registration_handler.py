"""
InsertRegistrationHandler.

Handler run by the activation server when an issuer registers a license.
"""

import logging

from activations.application.commands.insert_registration import InsertRegistrationCommand
from activations.application.dto.registration_dto import InsertRegistrationResponseDTO
from activations.domain.registration import RegistrationRecord
from activations.ports.registration_repository import RegistrationRepository
from core.domain.value_objects import InstallPolicy

logger = logging.getLogger(__name__)


class InsertRegistrationHandler:
    """Handler for InsertRegistrationCommand."""

    def __init__(self, registration_repository: RegistrationRepository):
        """Initialize handler with repository."""
        self.registration_repository = registration_repository

    async def handle(self, command: InsertRegistrationCommand) -> InsertRegistrationResponseDTO:
        """
        Handle insert registration command.

        Args:
            command: InsertRegistrationCommand

        Returns:
            InsertRegistrationResponseDTO describing the stored registration

        Raises:
            InvalidInstallPolicy: If no install limit is selected
            MissingSignature: If the signature is empty
        """
        record = RegistrationRecord(
            signature=command.signature,
            install_policy=InstallPolicy(
                install_limit=command.install_limit,
                unlimited_installs=command.unlimited_installs,
            ),
        )

        existing = await self.registration_repository.find_by_signature(record.signature)
        existed = existing is not None
        saved = await self.registration_repository.save(record, registered_by=command.registered_by)

        logger.info(
            "%s registration for license signature %s... by %s",
            "Updated" if existed else "Created",
            saved.signature_b64[:16],
            command.registered_by,
        )

        return InsertRegistrationResponseDTO(
            signature=saved.signature_b64,
            install_limit=saved.install_policy.install_limit,
            unlimited_installs=saved.install_policy.unlimited_installs,
            created=not existed,
            message="License updated" if existed else "License added",
        )
