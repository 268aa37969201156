import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="LicenseRegistration",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "signature",
                    models.CharField(
                        help_text="Base64 license signature", max_length=255, unique=True
                    ),
                ),
                ("install_limit", models.PositiveIntegerField(default=0)),
                ("unlimited_installs", models.BooleanField(default=False)),
                ("registered_by", models.CharField(blank=True, max_length=150)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "license_registrations",
                "ordering": ["-created_at"],
            },
        ),
    ]
