"""
VerifyLicenseQuery.

Query to check a license document against a public key.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class VerifyLicenseQuery:
    """Query to verify a license document."""

    document: str
    public_key: bytes
    current_time: Optional[datetime] = None
