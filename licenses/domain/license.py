"""
License domain entity.

This is the core domain entity representing a signed license.
It contains business logic and is independent of infrastructure.
"""
import base64
import re
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional, Union

from core.domain.value_objects import LicenseType

# Every issued license allows exactly one utilization.
MAX_UTILIZATION = 1

# Characters XML 1.0 allows in text, without CR: parsers read a literal CR back as LF.
_DOCUMENT_TEXT = re.compile("[\t\n\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]*")


def is_document_text(value: str) -> bool:
    """Return True if value survives a license document unchanged."""
    return _DOCUMENT_TEXT.fullmatch(value) is not None


def normalize_expiration(value: Union[date, datetime]) -> datetime:
    """
    Normalize an expiration to an aware UTC datetime with second precision.

    A bare date means midnight UTC; a naive datetime is taken as UTC.

    Args:
        value: Date or datetime

    Returns:
        Timezone-aware UTC datetime
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=0)


@dataclass(frozen=True)
class LicenseFields:
    """
    Operator input for a new license.

    Any field may be missing; LicenseSigner checks them before signing.
    license_id fixes the otherwise random identifier.
    """

    licensee_name: Optional[str] = None
    licensee_email: Optional[str] = None
    expires_at: Optional[Union[date, datetime]] = None
    license_type: LicenseType = LicenseType.STANDARD
    license_id: Optional[uuid.UUID] = None


@dataclass(frozen=True)
class LicenseTerms:
    """
    The signed content of a license: every field except the signature.
    """

    id: uuid.UUID
    license_type: LicenseType
    expires_at: datetime
    max_utilization: int
    licensee_name: str
    licensee_email: str

    def __post_init__(self):
        """Validate license terms."""
        if not isinstance(self.id, uuid.UUID):
            raise ValueError("License ID must be a UUID")
        if not isinstance(self.license_type, LicenseType):
            raise ValueError(f"Invalid license type: {self.license_type}")
        if self.expires_at.tzinfo is None:
            raise ValueError("Expiration must be timezone-aware")
        if self.max_utilization < 1:
            raise ValueError("Maximum utilization must be at least 1")
        if not self.licensee_name or not self.licensee_name.strip():
            raise ValueError("Licensee name cannot be blank")
        if not self.licensee_email or not self.licensee_email.strip():
            raise ValueError("Licensee email cannot be blank")
        if not (is_document_text(self.licensee_name) and is_document_text(self.licensee_email)):
            raise ValueError("Licensee fields contain characters a license document cannot hold")

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check whether the license has expired.

        Args:
            current_time: Current time (defaults to now, UTC)

        Returns:
            True if the expiration lies in the past
        """
        check_time = current_time or datetime.now(timezone.utc)
        return self.expires_at < check_time


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Terms plus the signature computed over them. Immutable: changing any
    term requires signing again.
    """

    terms: LicenseTerms
    signature: bytes

    def __post_init__(self):
        """Validate license entity."""
        if not self.signature:
            raise ValueError("License signature is required")

    @property
    def id(self) -> uuid.UUID:
        """License identifier."""
        return self.terms.id

    @property
    def signature_b64(self) -> str:
        """Signature as transmitted in documents and registrations."""
        return base64.b64encode(self.signature).decode("ascii")
