"""
InsertRegistrationCommand.

Command received by the activation server to store a license registration.
"""

from dataclasses import dataclass


@dataclass
class InsertRegistrationCommand:
    """Command to store a registration sent by the license issuer."""

    signature: bytes
    install_limit: int
    unlimited_installs: bool
    registered_by: str
