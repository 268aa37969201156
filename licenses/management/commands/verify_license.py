"""
Django management command to verify a license file.
"""

import logging
from pathlib import Path

from django.core.management.base import CommandError

from core.management.base import ReportingCommand
from licenses.application.handlers.verify_license_handler import VerifyLicenseHandler
from licenses.application.queries.verify_license import VerifyLicenseQuery
from licenses.infrastructure.license_files import read_license_file
from licenses.infrastructure.xml_codec import XmlLicenseDocumentCodec
from signing.infrastructure.key_files import read_key

logger = logging.getLogger(__name__)


class Command(ReportingCommand):
    """Command to check the signature and expiry of a license file."""

    help = "Verify a license file against a public key"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("license_file", type=Path, help="License file to verify")
        parser.add_argument(
            "--public-key",
            type=Path,
            required=True,
            help="Public key file",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        handler = VerifyLicenseHandler(XmlLicenseDocumentCodec())
        result = handler.handle(
            VerifyLicenseQuery(
                document=read_license_file(options["license_file"]),
                public_key=read_key(options["public_key"]),
            )
        )

        license = result.license
        self.stdout.write(f"Id:         {license.id}")
        self.stdout.write(f"Type:       {license.license_type}")
        self.stdout.write(f"Licensee:   {license.licensee_name} <{license.licensee_email}>")
        self.stdout.write(f"Expiration: {license.expires_at.isoformat()}")
        self.stdout.write(f"Quantity:   {license.max_utilization}")

        # pylint: disable=no-member
        if not result.is_authentic:
            raise CommandError("License signature is not valid")
        self.stdout.write(self.style.SUCCESS("Signature is valid"))
        if result.is_expired:
            self.stdout.write(self.style.WARNING("License has expired"))
