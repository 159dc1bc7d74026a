"""
Activations module - the license lifecycle engine.

This module handles:
- License activation and machine binding
- Periodic license validation and the validation quota
- Fraud detection over the activation history
"""
