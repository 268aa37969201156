"""
GenerateKeyPairHandler.

Handler for creating a key pair and writing both key files.
"""

from signing.application.commands.generate_key_pair import GenerateKeyPairCommand
from signing.application.dto.key_pair_dto import GenerateKeyPairResponseDTO
from signing.domain.key_pair import KeyPairGenerator
from signing.infrastructure.key_files import write_key_pair


class GenerateKeyPairHandler:
    """Handler for GenerateKeyPairCommand."""

    def __init__(self, generator: KeyPairGenerator):
        """Initialize handler with the key pair generator."""
        self.generator = generator

    def handle(self, command: GenerateKeyPairCommand) -> GenerateKeyPairResponseDTO:
        """
        Handle generate key pair command.

        Args:
            command: GenerateKeyPairCommand

        Returns:
            GenerateKeyPairResponseDTO with the written paths

        Raises:
            EmptyPassphrase: If the passphrase is empty
            PassphraseMismatch: If the confirmation differs
            KeyGenerationFailure: If the key cannot be generated
        """
        exported = self.generator.generate_exported(command.passphrase, command.confirmation)
        public_path, private_path = write_key_pair(
            exported, command.public_key_path, command.private_key_path
        )
        return GenerateKeyPairResponseDTO(
            public_key_path=public_path,
            private_key_path=private_path,
            public_key=exported.public_key.decode("ascii"),
        )
