"""
SearchLicensesQuery.
"""

from dataclasses import dataclass


@dataclass
class SearchLicensesQuery:
    """Find licenses whose key contains ``term``."""

    term: str
    history_limit: int = 20
