"""
License audit log repository port (interface).

The contract is append-only: there is no update operation, and deletion
is limited to purging entries older than a cutoff.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List
import uuid

from audit.domain.audit_entry import LicenseAuditLogEntry


class AuditLogRepository(ABC):
    """Abstract repository for LicenseAuditLogEntry entities."""

    @abstractmethod
    async def append(self, entry: LicenseAuditLogEntry) -> LicenseAuditLogEntry:
        """
        Append an audit entry.

        Args:
            entry: Entry to persist

        Returns:
            Persisted entry
        """
        pass

    @abstractmethod
    async def find_by_license(self, license_id: uuid.UUID) -> List[LicenseAuditLogEntry]:
        """Find entries for a license, newest first."""
        pass

    @abstractmethod
    async def find_recent(self, limit: int = 50) -> List[LicenseAuditLogEntry]:
        """Find the most recent entries across all licenses."""
        pass

    @abstractmethod
    async def purge_older_than(self, cutoff: datetime) -> int:
        """
        Delete entries created before ``cutoff``.

        Returns:
            Number of entries deleted
        """
        pass
