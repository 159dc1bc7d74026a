"""
License and ActivationHistory models.
"""
from django.db import models
from django.utils import timezone


class License(models.Model):
    """
    A machine-bound license.

    Created inactive by issuance, bound to one machine on first activation.
    """

    STATUS_CHOICES = [
        ("inactive", "Inactive"),
        ("active", "Active"),
        ("revoked", "Revoked"),
    ]

    key = models.TextField(unique=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="inactive")
    machine_id = models.TextField(null=True, blank=True)
    hardware_fingerprint = models.TextField(null=True, blank=True)
    activation_date = models.DateTimeField(null=True, blank=True)
    last_validation = models.DateTimeField(null=True, blank=True)
    validation_count = models.IntegerField(default=0)
    max_validations = models.IntegerField(default=1000)
    expiration_date = models.DateTimeField(null=True, blank=True)
    transfer_count = models.IntegerField(default=0)
    max_transfers = models.IntegerField(default=1)
    customer_email = models.EmailField(null=True, blank=True)
    customer_info = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status"], name="licenses_status_idx"),
            models.Index(fields=["expiration_date"], name="licenses_expiration_idx"),
        ]

    def __str__(self):
        return f"{self.key} ({self.status})"


class ActivationHistory(models.Model):
    """
    Append-only log of activation and validation attempts.

    ``license_key`` is a plain column, not a foreign key, so attempts with
    unknown keys are recorded too.
    """

    ACTION_CHOICES = [
        ("ACTIVATION_SUCCESS", "Activation success"),
        ("ACTIVATION_FAILED", "Activation failed"),
        ("REACTIVATION", "Reactivation"),
        ("FRAUD_ATTEMPT", "Fraud attempt"),
        ("TRANSFER_LIMIT_EXCEEDED", "Transfer limit exceeded"),
        ("VALIDATION_FAILED", "Validation failed"),
        ("SERVER_ERROR", "Server error"),
        ("REVOKED", "Revoked"),
    ]

    license_key = models.TextField()
    machine_id = models.TextField(null=True, blank=True)
    hardware_fingerprint = models.TextField(null=True, blank=True)
    action = models.CharField(max_length=32, choices=ACTION_CHOICES)
    success = models.BooleanField(default=False)
    ip_address = models.TextField(null=True, blank=True)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "activation_history"
        ordering = ["-timestamp", "-id"]
        verbose_name_plural = "activation history"
        indexes = [
            models.Index(fields=["license_key", "timestamp"], name="history_key_ts_idx"),
            models.Index(fields=["action"], name="history_action_idx"),
        ]

    def __str__(self):
        return f"{self.license_key} {self.action} @ {self.timestamp}"
