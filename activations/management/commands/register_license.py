"""
Django management command to register an issued license.

Used to retry when issue_license wrote the license file but could not
reach the activation server.
"""

import asyncio
import logging
from dataclasses import replace
from pathlib import Path

from django.conf import settings

from activations.application.handlers.register_license_handler import RegisterLicenseHandler
from activations.infrastructure.activation_client import ActivationRegistrationClient
from activations.management.arguments import (
    add_registration_arguments,
    describe_registration,
    registration_from_options,
)
from core.management.base import ReportingCommand
from licenses.infrastructure.license_files import read_license_file
from licenses.infrastructure.xml_codec import XmlLicenseDocumentCodec

logger = logging.getLogger(__name__)


class Command(ReportingCommand):
    """Command to register a license file with the activation server."""

    help = "Register the signature of a license file with the activation server"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("license_file", type=Path, help="License file to register")
        add_registration_arguments(parser)

    def handle(self, *args, **options):
        """Execute the command."""
        registration = registration_from_options(options)
        RegisterLicenseHandler.validate(registration)

        license = XmlLicenseDocumentCodec().deserialize(read_license_file(options["license_file"]))
        handler = RegisterLicenseHandler(
            ActivationRegistrationClient(timeout=settings.ACTIVATION_SERVER_TIMEOUT)
        )
        response = asyncio.run(handler.handle(replace(registration, signature=license.signature)))

        outcome = describe_registration(response.status_code, response.body)
        if response.ok:
            # pylint: disable=no-member
            self.stdout.write(self.style.SUCCESS(outcome))
        else:
            self.stderr.write(outcome)
