"""
Best-effort history appends.

A history write must never mask the outcome of the transition it
describes. Failures are logged and counted, then dropped.
"""

import logging
from typing import Optional

from core.domain.exceptions import StorageFault
from core.domain.value_objects import HistoryAction
from core.metrics import history_append_failures_total
from licenses.ports.license_ledger import LicenseLedger

logger = logging.getLogger(__name__)


class HistoryRecorder:
    """Appends activation history through the ledger, swallowing store faults."""

    def __init__(self, ledger: LicenseLedger):
        self.ledger = ledger

    async def record(
        self,
        key: str,
        machine_id: Optional[str],
        hardware_fingerprint: Optional[str],
        action: HistoryAction,
        success: bool,
        ip_address: Optional[str] = None,
    ) -> bool:
        """
        Append one history record.

        Returns:
            True if the record was written
        """
        try:
            await self.ledger.append_history(
                key, machine_id, hardware_fingerprint, action, success, ip_address
            )
        except StorageFault:
            history_append_failures_total.labels(action=action.value).inc()
            logger.error(
                "Failed to append activation history",
                extra={"license_key": key, "action": action.value},
                exc_info=True,
            )
            return False
        return True
