"""
Activation domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

from datetime import datetime, timedelta
from typing import Iterable

from core.domain.value_objects import HistoryAction
from licenses.domain.activation_history import ActivationHistoryRecord


class FraudDetector:
    """
    Sliding-window heuristic over a key's activation history.

    Only ``FRAUD_ATTEMPT`` records count. An alert is due when the number
    of attempts inside the window is strictly greater than the threshold.
    """

    def __init__(self, threshold: int = 3, window: timedelta = timedelta(hours=24)):
        if threshold < 0:
            raise ValueError("Threshold cannot be negative")
        if window <= timedelta(0):
            raise ValueError("Window must be positive")
        self.threshold = threshold
        self.window = window

    def count_recent_attempts(
        self, history: Iterable[ActivationHistoryRecord], now: datetime
    ) -> int:
        """
        Count fraud attempts newer than ``now - window``.

        Args:
            history: History records for one key, any order
            now: Reference time

        Returns:
            Number of fraud attempts inside the window
        """
        since = now - self.window
        return sum(
            1
            for record in history
            if record.action == HistoryAction.FRAUD_ATTEMPT and record.timestamp > since
        )

    def exceeds_threshold(self, attempt_count: int) -> bool:
        return attempt_count > self.threshold
