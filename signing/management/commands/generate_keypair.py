"""
Django management command to generate a signing key pair.
"""

import getpass
import logging
from pathlib import Path

from django.conf import settings

from core.domain.value_objects import Passphrase
from core.management.base import ReportingCommand
from signing.application.commands.generate_key_pair import GenerateKeyPairCommand
from signing.application.handlers.generate_key_pair_handler import GenerateKeyPairHandler
from signing.domain.key_pair import KeyPairGenerator
from signing.domain.private_key_cipher import PrivateKeyCipher

logger = logging.getLogger(__name__)


class Command(ReportingCommand):
    """Command to generate a key pair and write both key files."""

    help = "Generate an Ed25519 key pair; the private key is encrypted with a passphrase"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--public-key",
            type=Path,
            required=True,
            help="Public key file (.public_key appended when missing)",
        )
        parser.add_argument(
            "--private-key",
            type=Path,
            required=True,
            help="Private key file (.private_key appended when missing)",
        )
        parser.add_argument(
            "--passphrase",
            type=str,
            default=None,
            help="Private key passphrase (prompted when omitted)",
        )
        parser.add_argument(
            "--confirm-passphrase",
            type=str,
            default=None,
            help="Passphrase confirmation",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        passphrase = options["passphrase"]
        confirmation = options["confirm_passphrase"]
        if passphrase is None:
            passphrase = getpass.getpass("Passphrase: ")
            confirmation = getpass.getpass("Confirm passphrase: ")

        handler = GenerateKeyPairHandler(
            KeyPairGenerator(PrivateKeyCipher(iterations=settings.PRIVATE_KEY_KDF_ITERATIONS))
        )
        result = handler.handle(
            GenerateKeyPairCommand(
                public_key_path=options["public_key"],
                private_key_path=options["private_key"],
                passphrase=Passphrase(passphrase),
                confirmation=Passphrase(confirmation) if confirmation is not None else None,
            )
        )

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Public key written to {result.public_key_path}"))
        self.stdout.write(self.style.SUCCESS(f"Private key written to {result.private_key_path}"))
