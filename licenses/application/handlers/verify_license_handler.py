"""
VerifyLicenseHandler.

Handler for checking the signature and expiry of a license document.
"""

from licenses.application.dto.license_dto import VerifyLicenseResponseDTO
from licenses.application.handlers.issue_license_handler import license_to_dto
from licenses.application.queries.verify_license import VerifyLicenseQuery
from licenses.ports.license_codec import LicenseCodec


class VerifyLicenseHandler:
    """Handler for VerifyLicenseQuery."""

    def __init__(self, codec: LicenseCodec):
        """Initialize handler with the license codec."""
        self.codec = codec

    def handle(self, query: VerifyLicenseQuery) -> VerifyLicenseResponseDTO:
        """
        Handle verify license query.

        Args:
            query: VerifyLicenseQuery

        Returns:
            VerifyLicenseResponseDTO

        Raises:
            MalformedDocument: If the document or public key is unusable
        """
        license = self.codec.deserialize(query.document)
        return VerifyLicenseResponseDTO(
            license=license_to_dto(license),
            is_authentic=self.codec.verify(license, query.public_key),
            is_expired=license.terms.is_expired(query.current_time),
        )
