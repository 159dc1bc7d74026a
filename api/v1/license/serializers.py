"""
Serializers for the license client endpoints.

Field names follow the client wire format (camelCase). Values are opaque:
any non-empty string is accepted as sent, without trimming or length limits.
"""

from rest_framework import serializers


class ActivateRequestSerializer(serializers.Serializer):
    """Serializer for activate license request."""

    licenseKey = serializers.CharField(required=True, trim_whitespace=False)
    machineId = serializers.CharField(required=True, trim_whitespace=False)
    hardwareFingerprint = serializers.CharField(required=True, trim_whitespace=False)
    # Client clock as sent (ISO string or epoch millis); informational only
    timestamp = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class ValidateRequestSerializer(serializers.Serializer):
    """Serializer for validate license request."""

    licenseKey = serializers.CharField(required=True, trim_whitespace=False)
    machineId = serializers.CharField(required=True, trim_whitespace=False)
    hardwareFingerprint = serializers.CharField(required=True, trim_whitespace=False)


class ActivateResponseSerializer(serializers.Serializer):
    """Serializer for activate license response."""

    success = serializers.BooleanField()
    message = serializers.CharField()


class ValidateResponseSerializer(serializers.Serializer):
    """Serializer for validate license response."""

    valid = serializers.BooleanField()
    message = serializers.CharField(required=False)
    remainingValidations = serializers.IntegerField(required=False, min_value=0)
