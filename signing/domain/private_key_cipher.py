"""
Passphrase encryption for exported private keys.

The exported blob is base64 of a compact JSON envelope that records the
key derivation and cipher parameters next to the ciphertext:

    {"v": 1, "kdf": "pbkdf2-sha256", "iterations": N, "salt": ...,
     "cipher": "aes-256-gcm", "nonce": ..., "ciphertext": ...}

The header fields are bound to the ciphertext as AES-GCM associated data.
"""
import base64
import json
import logging
import secrets
from typing import Any, Dict, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from core.domain.exceptions import DecryptionFailure
from core.domain.value_objects import Passphrase

logger = logging.getLogger(__name__)

ENVELOPE_VERSION = 1
KDF_NAME = "pbkdf2-sha256"
CIPHER_NAME = "aes-256-gcm"
DEFAULT_ITERATIONS = 600_000
MAX_ITERATIONS = 10_000_000
SALT_SIZE = 16
NONCE_SIZE = 12
KEY_SIZE = 32


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _b64decode(data: str) -> bytes:
    return base64.b64decode(data.encode("ascii"), validate=True)


def _associated_data(header: Dict[str, Any]) -> bytes:
    return json.dumps(header, sort_keys=True, separators=(",", ":")).encode("utf-8")


def derive_key(passphrase: Passphrase, salt: bytes, iterations: int) -> bytes:
    """
    Derive the AES key from a passphrase.

    Args:
        passphrase: Operator passphrase
        salt: Random salt stored in the envelope
        iterations: PBKDF2 iteration count stored in the envelope

    Returns:
        32-byte key
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(passphrase.reveal())


class PrivateKeyCipher:
    """Encrypts and decrypts private key bytes under a passphrase."""

    def __init__(self, iterations: int = DEFAULT_ITERATIONS):
        if iterations < 1 or iterations > MAX_ITERATIONS:
            raise ValueError(f"Iteration count out of range: {iterations}")
        self.iterations = iterations

    def encrypt(self, private_key: bytes, passphrase: Union[Passphrase, str]) -> bytes:
        """
        Encrypt private key bytes.

        Args:
            private_key: Plaintext private key (PKCS#8 DER)
            passphrase: Encryption passphrase

        Returns:
            Exported blob (ASCII bytes)
        """
        passphrase = Passphrase.coerce(passphrase)
        salt = secrets.token_bytes(SALT_SIZE)
        nonce = secrets.token_bytes(NONCE_SIZE)
        header = {
            "v": ENVELOPE_VERSION,
            "kdf": KDF_NAME,
            "iterations": self.iterations,
            "salt": _b64encode(salt),
            "cipher": CIPHER_NAME,
            "nonce": _b64encode(nonce),
        }
        key = derive_key(passphrase, salt, self.iterations)
        ciphertext = AESGCM(key).encrypt(nonce, private_key, _associated_data(header))

        envelope = dict(header, ciphertext=_b64encode(ciphertext))
        return base64.b64encode(_associated_data(envelope))

    def decrypt(self, blob: bytes, passphrase: Union[Passphrase, str]) -> bytes:
        """
        Decrypt an exported private key blob.

        Args:
            blob: Exported blob
            passphrase: Passphrase used at encryption time

        Returns:
            Plaintext private key bytes

        Raises:
            DecryptionFailure: Wrong passphrase or corrupt blob, indistinguishably
        """
        passphrase = Passphrase.coerce(passphrase)
        try:
            envelope = json.loads(base64.b64decode(blob, validate=True).decode("utf-8"))
            header = {
                "v": envelope["v"],
                "kdf": envelope["kdf"],
                "iterations": envelope["iterations"],
                "salt": envelope["salt"],
                "cipher": envelope["cipher"],
                "nonce": envelope["nonce"],
            }
            if (
                header["v"] != ENVELOPE_VERSION
                or header["kdf"] != KDF_NAME
                or header["cipher"] != CIPHER_NAME
                or not isinstance(header["iterations"], int)
                or not 1 <= header["iterations"] <= MAX_ITERATIONS
            ):
                raise ValueError("Unsupported private key envelope")
            key = derive_key(passphrase, _b64decode(header["salt"]), header["iterations"])
            return AESGCM(key).decrypt(
                _b64decode(header["nonce"]),
                _b64decode(envelope["ciphertext"]),
                _associated_data(header),
            )
        except Exception:  # pylint: disable=broad-exception-caught
            logger.debug("Private key decryption failed")
        raise DecryptionFailure()
