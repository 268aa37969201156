"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import hmac
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from core.domain.exceptions import InvalidInstallPolicy


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


class LicenseType(Enum):
    """License type value object."""

    TRIAL = "Trial"
    STANDARD = "Standard"

    def __str__(self) -> str:
        """Return type as string."""
        return self.value


@dataclass(frozen=True)
class InstallPolicy(ValueObject):
    """
    How many installs the activation server allows for a license.

    Either a positive install limit or unlimited installs must be selected.
    """

    install_limit: int = 0
    unlimited_installs: bool = False

    def __post_init__(self):
        """Validate install policy."""
        if self.install_limit < 0:
            raise InvalidInstallPolicy("Install limit cannot be negative")
        if self.install_limit == 0 and not self.unlimited_installs:
            raise InvalidInstallPolicy()

    @classmethod
    def unlimited(cls) -> "InstallPolicy":
        """Return a policy without an install limit."""
        return cls(install_limit=0, unlimited_installs=True)


class Passphrase:
    """
    Passphrase held in a mutable buffer so it can be wiped after use.

    Never printed: repr and str are masked.
    """

    def __init__(self, value: Union[str, bytes, bytearray, None] = ""):
        if value is None:
            value = ""
        if isinstance(value, str):
            value = value.encode("utf-8")
        self._buffer = bytearray(value)
        self._cleared = False

    @classmethod
    def coerce(cls, value: Union["Passphrase", str, bytes, None]) -> "Passphrase":
        """Wrap a raw value, leaving existing Passphrase objects untouched."""
        if isinstance(value, Passphrase):
            return value
        return cls(value)

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        return "Passphrase(***)"

    __str__ = __repr__

    @property
    def cleared(self) -> bool:
        """True once clear() has wiped the buffer."""
        return self._cleared

    def reveal(self) -> bytes:
        """Return the passphrase bytes for key derivation."""
        if self._cleared:
            raise ValueError("Passphrase has been cleared")
        return bytes(self._buffer)

    def matches(self, other: Optional["Passphrase"]) -> bool:
        """Constant-time comparison with another passphrase."""
        if other is None:
            return False
        return hmac.compare_digest(bytes(self._buffer), bytes(other._buffer))

    def clear(self) -> None:
        """Overwrite and empty the buffer."""
        for index in range(len(self._buffer)):
            self._buffer[index] = 0
        del self._buffer[:]
        self._cleared = True
