import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("key", models.TextField(unique=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("inactive", "Inactive"), ("active", "Active"), ("revoked", "Revoked")],
                        default="inactive",
                        max_length=20,
                    ),
                ),
                ("machine_id", models.TextField(blank=True, null=True)),
                ("hardware_fingerprint", models.TextField(blank=True, null=True)),
                ("activation_date", models.DateTimeField(blank=True, null=True)),
                ("last_validation", models.DateTimeField(blank=True, null=True)),
                ("validation_count", models.IntegerField(default=0)),
                ("max_validations", models.IntegerField(default=1000)),
                ("expiration_date", models.DateTimeField(blank=True, null=True)),
                ("transfer_count", models.IntegerField(default=0)),
                ("max_transfers", models.IntegerField(default=1)),
                ("customer_email", models.EmailField(blank=True, max_length=254, null=True)),
                ("customer_info", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["status"], name="licenses_status_idx"),
                    models.Index(fields=["expiration_date"], name="licenses_expiration_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ActivationHistory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("license_key", models.TextField()),
                ("machine_id", models.TextField(blank=True, null=True)),
                ("hardware_fingerprint", models.TextField(blank=True, null=True)),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("ACTIVATION_SUCCESS", "Activation success"),
                            ("ACTIVATION_FAILED", "Activation failed"),
                            ("REACTIVATION", "Reactivation"),
                            ("FRAUD_ATTEMPT", "Fraud attempt"),
                            ("TRANSFER_LIMIT_EXCEEDED", "Transfer limit exceeded"),
                            ("VALIDATION_FAILED", "Validation failed"),
                            ("SERVER_ERROR", "Server error"),
                            ("REVOKED", "Revoked"),
                        ],
                        max_length=32,
                    ),
                ),
                ("success", models.BooleanField(default=False)),
                ("ip_address", models.TextField(blank=True, null=True)),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "activation_history",
                "ordering": ["-timestamp", "-id"],
                "verbose_name_plural": "activation history",
                "indexes": [
                    models.Index(fields=["license_key", "timestamp"], name="history_key_ts_idx"),
                    models.Index(fields=["action"], name="history_action_idx"),
                ],
            },
        ),
    ]
