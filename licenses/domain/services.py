"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import logging
import uuid
from typing import Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from core.domain.exceptions import (
    DecryptionFailure,
    InvalidLicenseeText,
    MissingExpiration,
    MissingLicensee,
    MissingPrivateKey,
)
from core.domain.value_objects import Passphrase
from licenses.domain.license import (
    MAX_UTILIZATION,
    License,
    LicenseFields,
    LicenseTerms,
    is_document_text,
    normalize_expiration,
)
from licenses.ports.license_codec import LicenseCodec
from signing.domain.private_key_cipher import PrivateKeyCipher

logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class LicenseSigner:
    """Domain service that turns operator fields into a signed License."""

    def __init__(self, codec: LicenseCodec, cipher: Optional[PrivateKeyCipher] = None):
        """
        Initialize signer.

        Args:
            codec: Codec providing the canonical byte form of license terms
            cipher: Cipher for the encrypted private key
        """
        self.codec = codec
        self.cipher = cipher or PrivateKeyCipher()

    @staticmethod
    def check_preconditions(fields: LicenseFields, encrypted_private_key: Optional[bytes]) -> None:
        """
        Check signing inputs in a fixed order.

        Raises:
            MissingPrivateKey: No private key loaded
            MissingExpiration: No expiration date
            MissingLicensee: Blank licensee name or email
            InvalidLicenseeText: Licensee name or email a license document cannot carry
        """
        if not encrypted_private_key:
            raise MissingPrivateKey()
        if fields.expires_at is None:
            raise MissingExpiration()
        if _is_blank(fields.licensee_name) or _is_blank(fields.licensee_email):
            raise MissingLicensee()
        if not (is_document_text(fields.licensee_name) and is_document_text(fields.licensee_email)):
            raise InvalidLicenseeText()

    def sign(
        self,
        fields: LicenseFields,
        encrypted_private_key: Optional[bytes],
        passphrase: Union[Passphrase, str],
    ) -> License:
        """
        Build and sign a license.

        Args:
            fields: Operator input
            encrypted_private_key: Exported private key blob
            passphrase: Passphrase of the private key

        Returns:
            Signed License entity

        Raises:
            ValidationFailure: If a precondition fails
            DecryptionFailure: If the private key cannot be decrypted
        """
        self.check_preconditions(fields, encrypted_private_key)

        terms = LicenseTerms(
            id=fields.license_id or uuid.uuid4(),
            license_type=fields.license_type,
            expires_at=normalize_expiration(fields.expires_at),
            max_utilization=MAX_UTILIZATION,
            licensee_name=fields.licensee_name,
            licensee_email=fields.licensee_email,
        )

        private_key = self._load_private_key(encrypted_private_key, passphrase)
        signature = private_key.sign(self.codec.canonical_bytes(terms))

        logger.info("Signed license %s (%s)", terms.id, terms.license_type)
        return License(terms=terms, signature=signature)

    def _load_private_key(
        self, encrypted_private_key: bytes, passphrase: Union[Passphrase, str]
    ) -> Ed25519PrivateKey:
        private_der = self.cipher.decrypt(encrypted_private_key, passphrase)
        try:
            private_key = serialization.load_der_private_key(private_der, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm):
            private_key = None
        if not isinstance(private_key, Ed25519PrivateKey):
            raise DecryptionFailure()
        return private_key
