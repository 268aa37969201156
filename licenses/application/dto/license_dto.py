"""
License DTOs for command output.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: uuid.UUID
    license_type: str
    expires_at: datetime
    max_utilization: int
    licensee_name: str
    licensee_email: str
    signature: str


@dataclass
class IssueLicenseResponseDTO:
    """
    DTO for issue license result.

    registration_error is set when the license was written but the
    activation server could not be reached.
    """

    license: LicenseDTO
    path: Path
    registered: bool = False
    registration_status: Optional[int] = None
    registration_response: Optional[str] = None
    registration_error: Optional[str] = None


@dataclass
class VerifyLicenseResponseDTO:
    """DTO for verify license result."""

    license: LicenseDTO
    is_authentic: bool
    is_expired: bool
