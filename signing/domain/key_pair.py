"""
KeyPair domain entity and generator.

A key pair is created once per signing identity. The public half is
exported in plaintext; the private half only ever leaves memory encrypted
under an operator passphrase.
"""
import base64
import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from core.domain.exceptions import EmptyPassphrase, KeyGenerationFailure, PassphraseMismatch
from core.domain.value_objects import Passphrase
from signing.domain.private_key_cipher import PrivateKeyCipher

logger = logging.getLogger(__name__)

PassphraseInput = Union[Passphrase, str, None]


@dataclass(frozen=True)
class KeyPair:
    """
    Asymmetric signing key pair.

    public_key is the DER SubjectPublicKeyInfo, private_key the unencrypted
    PKCS#8 DER. The private half is kept out of repr.
    """

    public_key: bytes
    private_key: bytes = field(repr=False)

    def __post_init__(self):
        """Validate key pair."""
        if not self.public_key:
            raise ValueError("Public key is required")
        if not self.private_key:
            raise ValueError("Private key is required")


@dataclass(frozen=True)
class ExportedKeyPair:
    """Key pair in its persisted form: plaintext public, encrypted private."""

    public_key: bytes
    private_key: bytes = field(repr=False)


def validate_passphrase(passphrase: Passphrase, confirmation: Optional[Passphrase] = None) -> None:
    """
    Check a passphrase and its optional confirmation.

    Raises:
        EmptyPassphrase: Passphrase has zero length
        PassphraseMismatch: Confirmation given and different
    """
    if len(passphrase) == 0:
        raise EmptyPassphrase()
    if confirmation is not None and not passphrase.matches(confirmation):
        raise PassphraseMismatch()


class KeyPairGenerator:
    """Domain service for signing key pair generation and export."""

    def __init__(self, cipher: Optional[PrivateKeyCipher] = None):
        """Initialize generator with the cipher used for private key export."""
        self.cipher = cipher or PrivateKeyCipher()

    def generate(self) -> KeyPair:
        """
        Generate a new Ed25519 key pair.

        Returns:
            KeyPair entity

        Raises:
            KeyGenerationFailure: If the key cannot be generated
        """
        try:
            private_key = Ed25519PrivateKey.generate()
            private_der = private_key.private_bytes(
                encoding=serialization.Encoding.DER,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption(),
            )
            public_der = private_key.public_key().public_bytes(
                encoding=serialization.Encoding.DER,
                format=serialization.PublicFormat.SubjectPublicKeyInfo,
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Key pair generation failed: %s", e)
            raise KeyGenerationFailure() from e

        logger.info("Generated Ed25519 key pair")
        return KeyPair(public_key=public_der, private_key=private_der)

    @staticmethod
    def export_public_key(key_pair: KeyPair) -> bytes:
        """
        Export the public key in plaintext.

        Args:
            key_pair: KeyPair entity

        Returns:
            Base64 of the DER public key (ASCII bytes)
        """
        return base64.b64encode(key_pair.public_key)

    def export_private_key(
        self,
        key_pair: KeyPair,
        passphrase: PassphraseInput,
        confirmation: PassphraseInput = None,
    ) -> bytes:
        """
        Export the private key encrypted under a passphrase.

        The passphrase buffers are wiped once the export succeeds.

        Args:
            key_pair: KeyPair entity
            passphrase: Encryption passphrase
            confirmation: Optional second entry of the passphrase

        Returns:
            Encrypted private key blob

        Raises:
            EmptyPassphrase: Passphrase is empty
            PassphraseMismatch: Confirmation does not match
        """
        passphrase = Passphrase.coerce(passphrase)
        confirmation = Passphrase.coerce(confirmation) if confirmation is not None else None
        validate_passphrase(passphrase, confirmation)

        exported = self.cipher.encrypt(key_pair.private_key, passphrase)

        passphrase.clear()
        if confirmation is not None:
            confirmation.clear()
        return exported

    def generate_exported(
        self,
        passphrase: PassphraseInput,
        confirmation: PassphraseInput = None,
    ) -> ExportedKeyPair:
        """
        Validate the passphrase, then generate and export a key pair.

        Nothing is generated when the passphrase is rejected.

        Args:
            passphrase: Encryption passphrase
            confirmation: Optional second entry of the passphrase

        Returns:
            ExportedKeyPair ready to be written to disk
        """
        passphrase = Passphrase.coerce(passphrase)
        confirmation = Passphrase.coerce(confirmation) if confirmation is not None else None
        validate_passphrase(passphrase, confirmation)

        key_pair = self.generate()
        return ExportedKeyPair(
            public_key=self.export_public_key(key_pair),
            private_key=self.export_private_key(key_pair, passphrase, confirmation),
        )
