"""
Registration domain objects.

A registration tells the activation server how many installs a license
allows. The license is referenced by its signature.
"""
import base64
from dataclasses import dataclass, field
from typing import Any, Dict

from core.domain.exceptions import MissingCredentials, MissingSignature
from core.domain.value_objects import InstallPolicy

INSERT_PATH = "insert"


def _is_blank(value: str) -> bool:
    return value is None or not value.strip()


@dataclass(frozen=True)
class ServerCredentials:
    """Activation server address and the operator's HTTP Basic credentials."""

    server_url: str
    username: str
    password: str = field(repr=False)

    def __post_init__(self):
        """Validate credentials."""
        if _is_blank(self.server_url) or _is_blank(self.username) or _is_blank(self.password):
            raise MissingCredentials()

    @property
    def insert_url(self) -> str:
        """URL of the registration endpoint."""
        return f"{self.server_url.strip().rstrip('/')}/{INSERT_PATH}"

    def authorization_header(self) -> str:
        """HTTP Basic authorization value for a single request."""
        token = base64.b64encode(f"{self.username}:{self.password}".encode("utf-8"))
        return f"Basic {token.decode('ascii')}"


@dataclass(frozen=True)
class RegistrationRecord:
    """Signature of an issued license plus its install policy."""

    signature: bytes
    install_policy: InstallPolicy

    def __post_init__(self):
        """Validate registration record."""
        if not self.signature:
            raise MissingSignature()

    @property
    def signature_b64(self) -> str:
        """Signature in the form used by license documents."""
        return base64.b64encode(self.signature).decode("ascii")

    def to_payload(self) -> Dict[str, Any]:
        """
        Convert to the JSON body sent to the activation server.

        Returns:
            Dictionary with Signature, InstallLimit and UnlimitedInstalls
        """
        return {
            "Signature": self.signature_b64,
            "InstallLimit": self.install_policy.install_limit,
            "UnlimitedInstalls": self.install_policy.unlimited_installs,
        }


@dataclass(frozen=True)
class ServerResponse:
    """Raw activation server reply, surfaced to the operator verbatim."""

    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        """True for 2xx status codes."""
        return 200 <= self.status_code < 300
