"""
Registration DTOs for API responses.
"""
from dataclasses import dataclass


@dataclass
class InsertRegistrationResponseDTO:
    """DTO for the insert endpoint response."""

    signature: str
    install_limit: int
    unlimited_installs: bool
    created: bool
    message: str
