"""
Registration repository port (interface).

This defines the contract for registration persistence operations
on the activation server. Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Optional

from activations.domain.registration import RegistrationRecord


class RegistrationRepository(ABC):
    """
    Abstract repository for RegistrationRecord entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, record: RegistrationRecord, registered_by: str) -> RegistrationRecord:
        """
        Save a registration, replacing the policy of an existing one.

        Args:
            record: Registration record to save
            registered_by: Username that sent the registration

        Returns:
            Saved registration record
        """
        pass

    @abstractmethod
    async def find_by_signature(self, signature: bytes) -> Optional[RegistrationRecord]:
        """
        Find a registration by license signature.

        Args:
            signature: License signature

        Returns:
            RegistrationRecord or None if not found
        """
        pass
