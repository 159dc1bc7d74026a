"""
License ledger port (interface).

This defines the contract for the durable license record and its
append-only activation history. Implementations are in the
infrastructure layer.

Every write to a license row is a single conditional update. Methods
that change state return the number of rows changed (0 or 1) so callers
can tell a lost race from a success.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from core.domain.value_objects import HistoryAction
from licenses.domain.activation_history import ActivationHistoryRecord
from licenses.domain.license import License


class LicenseLedger(ABC):
    """
    Abstract ledger for License entities and their history.

    Any method may raise ``StorageFault`` when the store fails.
    """

    @abstractmethod
    async def lookup(self, key: str) -> Optional[License]:
        """
        Find a license by key.

        Args:
            key: License key string

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def lookup_unexpired(self, key: str) -> Optional[License]:
        """
        Find a license by key, treating an expired license as absent.

        Args:
            key: License key string

        Returns:
            License entity or None if not found or expired
        """
        pass

    @abstractmethod
    async def activate(self, key: str, machine_id: str, hardware_fingerprint: str) -> int:
        """
        Bind an inactive license to a machine.

        Returns:
            1 if the license moved from inactive to active, 0 otherwise
        """
        pass

    @abstractmethod
    async def record_validation(
        self, key: str, machine_id: str, hardware_fingerprint: str
    ) -> int:
        """
        Count a validation against an active license bound to this machine.

        Returns:
            1 if the counter was incremented, 0 if any predicate failed
        """
        pass

    @abstractmethod
    async def append_history(
        self,
        key: str,
        machine_id: Optional[str],
        hardware_fingerprint: Optional[str],
        action: HistoryAction,
        success: bool,
        ip_address: Optional[str] = None,
    ) -> None:
        """Append one record to the activation history."""
        pass

    @abstractmethod
    async def issue(
        self,
        key: str,
        expiration_date: Optional[datetime] = None,
        max_transfers: int = 1,
        max_validations: int = 1000,
        customer_email: Optional[str] = None,
        customer_info: Optional[str] = None,
    ) -> int:
        """
        Insert a new inactive license.

        Raises:
            DuplicateLicenseKeyError: If the key already exists
        """
        pass

    @abstractmethod
    async def recent_history(self, key: str, limit: int = 50) -> List[ActivationHistoryRecord]:
        """
        Most recent history records for one key, newest first.

        Args:
            key: License key string
            limit: Maximum number of records

        Returns:
            List of history records
        """
        pass

    @abstractmethod
    async def revoke(self, key: str) -> int:
        """
        Revoke a license that is not already revoked.

        Returns:
            1 if the license was revoked, 0 otherwise
        """
        pass

    @abstractmethod
    async def search(self, term: str) -> List[License]:
        """Licenses whose key contains ``term``."""
        pass

    @abstractmethod
    async def list_licenses(self) -> List[License]:
        """All licenses, newest first."""
        pass

    @abstractmethod
    async def latest_history(self, limit: int = 50) -> List[ActivationHistoryRecord]:
        """Most recent history records across all keys, newest first."""
        pass

    @abstractmethod
    async def ping(self) -> None:
        """
        Probe the store.

        Raises:
            StorageFault: If the store cannot be reached
        """
        pass
