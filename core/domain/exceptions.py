"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationFailure(DomainException):
    """
    Base exception for rejected operator input.

    Raised before any side effect: nothing is generated, signed or written.
    """

    pass


class EmptyPassphrase(ValidationFailure):
    """Raised when a private key passphrase is empty."""

    def __init__(self, message: str = "Passphrase cannot be empty"):
        super().__init__(message, code="EMPTY_PASSPHRASE")


class PassphraseMismatch(ValidationFailure):
    """Raised when the passphrase confirmation does not match."""

    def __init__(self, message: str = "Passphrase and confirmation do not match"):
        super().__init__(message, code="PASSPHRASE_MISMATCH")


class MissingPrivateKey(ValidationFailure):
    """Raised when signing is attempted without a private key."""

    def __init__(self, message: str = "A private key must be loaded before signing"):
        super().__init__(message, code="MISSING_PRIVATE_KEY")


class MissingExpiration(ValidationFailure):
    """Raised when a license has no expiration date."""

    def __init__(self, message: str = "An expiration date must be set"):
        super().__init__(message, code="MISSING_EXPIRATION")


class MissingLicensee(ValidationFailure):
    """Raised when the licensee name or email is blank."""

    def __init__(self, message: str = "Licensee name and email cannot be blank"):
        super().__init__(message, code="MISSING_LICENSEE")


class InvalidLicenseeText(ValidationFailure):
    """Raised when the licensee name or email holds characters a license document cannot carry."""

    def __init__(
        self,
        message: str = "Licensee name and email cannot contain carriage returns or control characters",
    ):
        super().__init__(message, code="INVALID_LICENSEE_TEXT")


class MissingCredentials(ValidationFailure):
    """Raised when activation server url, username or password is blank."""

    def __init__(self, message: str = "Url, Username, and Password cannot be blank"):
        super().__init__(message, code="MISSING_CREDENTIALS")


class InvalidInstallPolicy(ValidationFailure):
    """Raised when an install policy selects no limit at all."""

    def __init__(
        self,
        message: str = (
            "No install limit set (Install Limit is 0, and Unlimited Installs is false). "
            "Please set one of these."
        ),
    ):
        super().__init__(message, code="INVALID_INSTALL_POLICY")


class MissingSignature(ValidationFailure):
    """Raised when a registration references no license signature."""

    def __init__(self, message: str = "License signature is required"):
        super().__init__(message, code="MISSING_SIGNATURE")


class CryptoFailure(DomainException):
    """Base exception for key generation and key decryption errors."""

    pass


class KeyGenerationFailure(CryptoFailure):
    """Raised when the key pair cannot be generated."""

    def __init__(self, message: str = "Unable to generate key pair"):
        super().__init__(message, code="KEY_GENERATION_FAILED")


class DecryptionFailure(CryptoFailure):
    """
    Raised when a private key cannot be decrypted.

    The message is the same whether the passphrase or the key bytes
    were at fault.
    """

    def __init__(self, message: str = "Unable to decrypt private key"):
        super().__init__(message, code="DECRYPTION_FAILED")


class MalformedDocument(DomainException):
    """Raised when a license document is structurally invalid."""

    def __init__(self, message: str = "Malformed license document"):
        super().__init__(message, code="MALFORMED_DOCUMENT")


class InvalidPublicKey(MalformedDocument):
    """Raised when a public key cannot be loaded for verification."""

    def __init__(self, message: str = "Invalid public key"):
        DomainException.__init__(self, message, code="INVALID_PUBLIC_KEY")


class RegistrationTransportFailure(DomainException):
    """Raised when the activation server cannot be reached."""

    def __init__(self, message: str = "Unable to reach the activation server"):
        super().__init__(message, code="REGISTRATION_TRANSPORT_FAILED")
