"""
IssueLicenseHandler.

Signs a license, writes the license file and, when asked, registers the
license with the activation server. Writing and registering are not
atomic: a license file stays valid even if registration fails.
"""

import logging
from dataclasses import replace
from typing import Optional

from activations.application.handlers.register_license_handler import RegisterLicenseHandler
from core.domain.exceptions import RegistrationTransportFailure
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.dto.license_dto import IssueLicenseResponseDTO, LicenseDTO
from licenses.domain.license import License
from licenses.domain.services import LicenseSigner
from licenses.infrastructure.license_files import write_license_file
from licenses.ports.license_codec import LicenseCodec

logger = logging.getLogger(__name__)


def license_to_dto(license: License) -> LicenseDTO:
    """Convert a License entity to its DTO."""
    terms = license.terms
    return LicenseDTO(
        id=terms.id,
        license_type=terms.license_type.value,
        expires_at=terms.expires_at,
        max_utilization=terms.max_utilization,
        licensee_name=terms.licensee_name,
        licensee_email=terms.licensee_email,
        signature=license.signature_b64,
    )


class IssueLicenseHandler:
    """Handler for IssueLicenseCommand."""

    def __init__(
        self,
        signer: LicenseSigner,
        codec: LicenseCodec,
        register_handler: Optional[RegisterLicenseHandler] = None,
    ):
        """Initialize handler with the signer, codec and registration handler."""
        self.signer = signer
        self.codec = codec
        self.register_handler = register_handler

    async def handle(self, command: IssueLicenseCommand) -> IssueLicenseResponseDTO:
        """
        Handle issue license command.

        All input is validated before the license is signed, so a rejected
        command writes nothing.

        Args:
            command: IssueLicenseCommand

        Returns:
            IssueLicenseResponseDTO with the written path and registration outcome

        Raises:
            ValidationFailure: If license fields or registration input are incomplete
            DecryptionFailure: If the private key cannot be decrypted
        """
        self.signer.check_preconditions(command.fields, command.encrypted_private_key)
        if command.registration is not None:
            if self.register_handler is None:
                raise ValueError("Registration requested without a registration handler")
            RegisterLicenseHandler.validate(command.registration)

        license = self.signer.sign(
            command.fields, command.encrypted_private_key, command.passphrase
        )
        path = write_license_file(command.output_path, self.codec.serialize(license))
        result = IssueLicenseResponseDTO(license=license_to_dto(license), path=path)

        if command.registration is None:
            return result

        registration = replace(command.registration, signature=license.signature)
        try:
            response = await self.register_handler.handle(registration)
        except RegistrationTransportFailure as e:
            logger.error("License %s written but not registered: %s", license.id, e.message)
            result.registration_error = e.message
            return result

        result.registered = response.ok
        result.registration_status = response.status_code
        result.registration_response = response.body
        return result
