"""
Django model discovery for the licenses app.
"""
from licenses.infrastructure.models import ActivationHistory, License  # noqa: F401
