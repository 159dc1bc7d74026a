"""
LicenseReportQuery.
"""

from dataclasses import dataclass


@dataclass
class LicenseReportQuery:
    """Parameters of the monitoring overview."""

    history_window: int = 50  # latest history records scanned for suspicious entries
    suspicious_limit: int = 10
    expiring_within_days: int = 30
