"""
Django management command to issue a signed license file.

When an activation server is configured or given, the license is also
registered there with its install policy.
"""

import argparse
import asyncio
import getpass
import logging
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

from django.conf import settings

from activations.application.handlers.register_license_handler import RegisterLicenseHandler
from activations.infrastructure.activation_client import ActivationRegistrationClient
from activations.management.arguments import (
    add_registration_arguments,
    describe_registration,
    registration_from_options,
)
from core.domain.value_objects import LicenseType, Passphrase
from core.management.base import ReportingCommand
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.domain.license import LicenseFields
from licenses.domain.services import LicenseSigner
from licenses.infrastructure.xml_codec import XmlLicenseDocumentCodec
from signing.domain.private_key_cipher import PrivateKeyCipher
from signing.infrastructure.key_files import read_key

logger = logging.getLogger(__name__)


def expiration_date(value: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"'{value}' is not a YYYY-MM-DD date") from e


class Command(ReportingCommand):
    """Command to sign a license and write it to a .lic file."""

    help = "Sign a license for a licensee and write the license file"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--private-key",
            type=Path,
            default=None,
            help="Encrypted private key file",
        )
        parser.add_argument(
            "--passphrase",
            type=str,
            default=None,
            help="Private key passphrase (prompted when omitted)",
        )
        parser.add_argument("--name", type=str, default=None, help="Licensee name")
        parser.add_argument("--email", type=str, default=None, help="Licensee email")
        parser.add_argument(
            "--expires",
            type=expiration_date,
            default=None,
            help="Expiration date YYYY-MM-DD (default: today plus LICENSE_DEFAULT_EXPIRATION_DAYS)",
        )
        parser.add_argument(
            "--license-type",
            choices=[choice.value for choice in LicenseType],
            default=LicenseType.STANDARD.value,
            help="License type",
        )
        parser.add_argument(
            "--output",
            type=Path,
            required=True,
            help="License file (.lic appended when missing)",
        )
        parser.add_argument(
            "--skip-registration",
            action="store_true",
            help="Do not register the license with the activation server",
        )
        add_registration_arguments(parser)

    def handle(self, *args, **options):
        """Execute the command."""
        encrypted_private_key = None
        passphrase = options["passphrase"]
        if options["private_key"] is not None:
            encrypted_private_key = read_key(options["private_key"])
            if passphrase is None:
                passphrase = getpass.getpass("Passphrase: ")

        expires = options["expires"]
        if expires is None:
            expires = datetime.now(timezone.utc).date() + timedelta(
                days=settings.LICENSE_DEFAULT_EXPIRATION_DAYS
            )

        registration = None
        register_handler = None
        if options["server_url"] and not options["skip_registration"]:
            registration = registration_from_options(options)
            register_handler = RegisterLicenseHandler(
                ActivationRegistrationClient(timeout=settings.ACTIVATION_SERVER_TIMEOUT)
            )

        codec = XmlLicenseDocumentCodec()
        signer = LicenseSigner(
            codec, PrivateKeyCipher(iterations=settings.PRIVATE_KEY_KDF_ITERATIONS)
        )
        handler = IssueLicenseHandler(signer, codec, register_handler)
        command = IssueLicenseCommand(
            fields=LicenseFields(
                licensee_name=options["name"],
                licensee_email=options["email"],
                expires_at=expires,
                license_type=LicenseType(options["license_type"]),
            ),
            encrypted_private_key=encrypted_private_key,
            passphrase=Passphrase(passphrase),
            output_path=options["output"],
            registration=registration,
        )

        result = asyncio.run(handler.handle(command))

        # pylint: disable=no-member
        self.stdout.write(
            self.style.SUCCESS(f"License {result.license.id} written to {result.path}")
        )
        if registration is None:
            return
        outcome = describe_registration(result.registration_status, result.registration_response)
        if result.registration_error:
            self.stderr.write(
                f"License was not registered: {result.registration_error}. "
                f"Run register_license {result.path} to retry."
            )
        elif result.registered:
            self.stdout.write(self.style.SUCCESS(outcome))
        else:
            self.stderr.write(outcome)
