"""
LicenseRegistration Django ORM model.

This is the infrastructure layer model for registrations received by the
activation server. Domain objects are in activations.domain.registration.
"""
import uuid

from django.db import models


class LicenseRegistration(models.Model):
    """
    Install policy registered for one issued license.
    The license is identified by its base64 signature.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    signature = models.CharField(
        max_length=255,
        unique=True,
        help_text="Base64 license signature",
    )
    install_limit = models.PositiveIntegerField(default=0)
    unlimited_installs = models.BooleanField(default=False)
    registered_by = models.CharField(max_length=150, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "license_registrations"
        ordering = ["-created_at"]

    def clean(self):
        """Validate registration fields."""
        from django.core.exceptions import ValidationError

        if not self.signature or len(self.signature.strip()) == 0:
            raise ValidationError("Signature cannot be empty")
        if self.install_limit == 0 and not self.unlimited_installs:
            raise ValidationError("Either an install limit or unlimited installs is required")

    def save(self, *args, **kwargs):
        """Save registration with validation."""
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self):
        limit = "unlimited" if self.unlimited_installs else str(self.install_limit)
        return f"{self.signature[:16]}... ({limit} installs)"
