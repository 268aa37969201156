"""
License codec port (interface).

This defines the contract for turning licenses into documents and back.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod

from licenses.domain.license import License, LicenseTerms


class LicenseCodec(ABC):
    """
    Abstract codec for License documents.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    def canonical_bytes(self, terms: LicenseTerms) -> bytes:
        """
        Deterministic byte form of the terms that gets signed.

        Args:
            terms: License terms

        Returns:
            Canonical bytes
        """
        pass

    @abstractmethod
    def serialize(self, license: License) -> str:
        """
        Serialize a signed license to document text.

        Args:
            license: License entity

        Returns:
            Document text
        """
        pass

    @abstractmethod
    def deserialize(self, text: str) -> License:
        """
        Parse document text into a License.

        Args:
            text: Document text

        Returns:
            License entity

        Raises:
            MalformedDocument: If the document is structurally invalid
        """
        pass

    @abstractmethod
    def verify(self, license: License, public_key: bytes) -> bool:
        """
        Check the license signature against a public key.

        Args:
            license: License entity
            public_key: Exported public key

        Returns:
            True if the signature matches the terms
        """
        pass

    def verify_document(self, text: str, public_key: bytes) -> bool:
        """
        Parse and verify document text.

        Args:
            text: Document text
            public_key: Exported public key

        Returns:
            True if the document is authentic
        """
        return self.verify(self.deserialize(text), public_key)
