"""
Django admin configuration for activations app.
"""

from django.contrib import admin
from django.utils.html import format_html

from activations.infrastructure.models import LicenseRegistration


@admin.register(LicenseRegistration)
class LicenseRegistrationAdmin(admin.ModelAdmin):
    """Admin interface for LicenseRegistration model."""

    list_display = [
        "signature_display",
        "install_policy_display",
        "registered_by",
        "created_at",
        "updated_at",
    ]
    list_filter = [
        "unlimited_installs",
        "created_at",
    ]
    search_fields = [
        "signature",
        "registered_by",
    ]
    readonly_fields = [
        "id",
        "signature",
        "registered_by",
        "created_at",
        "updated_at",
    ]
    fieldsets = (
        (
            "License",
            {"fields": ("id", "signature")},
        ),
        (
            "Install Policy",
            {"fields": ("install_limit", "unlimited_installs")},
        ),
        (
            "Audit",
            {"fields": ("registered_by", "created_at", "updated_at")},
        ),
    )

    @admin.display(description="Signature")
    def signature_display(self, obj):
        """Show the start of the signature."""
        return format_html("<code>{}…</code>", obj.signature[:24])

    @admin.display(description="Installs")
    def install_policy_display(self, obj):
        """Show the install limit or 'Unlimited'."""
        if obj.unlimited_installs:
            return format_html('<span style="color: green;">{}</span>', "Unlimited")
        return obj.install_limit
