"""
Django implementation of RegistrationRepository port.

This adapter converts between domain objects and Django ORM models.
"""

import base64
from typing import Optional

from asgiref.sync import sync_to_async

from activations.domain.registration import RegistrationRecord
from activations.infrastructure.models import LicenseRegistration as LicenseRegistrationModel
from activations.ports.registration_repository import RegistrationRepository
from core.domain.value_objects import InstallPolicy


def _signature_key(signature: bytes) -> str:
    return base64.b64encode(signature).decode("ascii")


class DjangoRegistrationRepository(RegistrationRepository):
    """
    Django ORM implementation of RegistrationRepository.

    This adapter:
    1. Converts Django models to domain objects
    2. Converts domain objects to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseRegistrationModel) -> RegistrationRecord:
        """
        Convert Django model to domain object.

        Args:
            model: Django LicenseRegistration model

        Returns:
            RegistrationRecord domain object
        """
        return RegistrationRecord(
            signature=base64.b64decode(model.signature),
            install_policy=InstallPolicy(
                install_limit=model.install_limit,
                unlimited_installs=model.unlimited_installs,
            ),
        )

    def _to_model(self, record: RegistrationRecord, registered_by: str) -> LicenseRegistrationModel:
        """
        Convert domain object to Django model.

        Args:
            record: RegistrationRecord domain object
            registered_by: Username that sent the registration

        Returns:
            Django LicenseRegistration model
        """
        # pylint: disable=no-member
        model, created = LicenseRegistrationModel.objects.get_or_create(
            signature=record.signature_b64,
            defaults={
                "install_limit": record.install_policy.install_limit,
                "unlimited_installs": record.install_policy.unlimited_installs,
                "registered_by": registered_by,
            },
        )
        # Update if exists
        if not created:
            model.install_limit = record.install_policy.install_limit
            model.unlimited_installs = record.install_policy.unlimited_installs
            model.registered_by = registered_by
        return model

    async def save(self, record: RegistrationRecord, registered_by: str) -> RegistrationRecord:
        """
        Save a registration.

        Args:
            record: Registration record to save
            registered_by: Username that sent the registration

        Returns:
            Saved registration record
        """
        model = await sync_to_async(self._to_model)(record, registered_by)
        await sync_to_async(model.save)()
        return self._to_domain(model)

    async def find_by_signature(self, signature: bytes) -> Optional[RegistrationRecord]:
        """
        Find a registration by license signature.

        Args:
            signature: License signature

        Returns:
            RegistrationRecord or None if not found
        """
        try:
            # pylint: disable=no-member
            model = await sync_to_async(LicenseRegistrationModel.objects.get)(
                signature=_signature_key(signature)
            )
            return self._to_domain(model)
        except LicenseRegistrationModel.DoesNotExist:  # pylint: disable=no-member
            return None
