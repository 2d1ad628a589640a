"""
License audit log service.

Records license transitions. Writes are best-effort: a failed append is
logged and counted, and the state change that triggered it stands.
"""
import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional
import uuid

from audit.domain.audit_entry import LicenseAuditLogEntry
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.clock import Clock, SystemClock
from core.domain.value_objects import AuditAction
from core.metrics import audit_write_failures_total

logger = logging.getLogger(__name__)


class AuditLogService:
    """Append-only writer and reader for the license audit log."""

    def __init__(self, repository: AuditLogRepository, clock: Clock = None):
        """Initialize service with repository and clock."""
        self.repository = repository
        self.clock = clock or SystemClock()

    async def record(
        self,
        license_id: uuid.UUID,
        action: AuditAction,
        performed_by: str,
        previous_state: Optional[Dict[str, Any]],
        new_state: Dict[str, Any],
        reason: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[LicenseAuditLogEntry]:
        """
        Append an audit entry for a license transition.

        Args:
            license_id: License UUID
            action: Transition performed
            performed_by: Acting user
            previous_state: Snapshot before the transition
            new_state: Snapshot after the transition
            reason: Optional human-readable reason
            metadata: Optional extra context

        Returns:
            The stored entry, or None if the write failed
        """
        entry = LicenseAuditLogEntry.create(
            license_id=license_id,
            action=action,
            performed_by=performed_by,
            previous_state=previous_state,
            new_state=new_state,
            now=self.clock.now(),
            reason=reason,
            metadata=metadata,
        )
        try:
            stored = await self.repository.append(entry)
        except Exception as e:  # pylint: disable=broad-exception-caught
            audit_write_failures_total.labels(action=action.value).inc()
            logger.error(
                "Failed to write audit entry %s for license %s: %s",
                action.value,
                license_id,
                e,
                exc_info=True,
            )
            return None

        logger.debug("Audit entry %s recorded for license %s", action.value, license_id)
        return stored

    async def get_license_history(self, license_id: uuid.UUID) -> List[LicenseAuditLogEntry]:
        """Return the audit trail of a license, newest first."""
        return await self.repository.find_by_license(license_id)

    async def get_recent_activity(self, limit: int = 50) -> List[LicenseAuditLogEntry]:
        """Return the most recent audit entries."""
        return await self.repository.find_recent(limit)

    async def purge_older_than(self, retention_days: int) -> int:
        """
        Apply the retention policy.

        Args:
            retention_days: Entries older than this many days are deleted

        Returns:
            Number of entries deleted
        """
        if retention_days < 1:
            raise ValueError("Retention must be at least 1 day")
        cutoff = self.clock.now() - timedelta(days=retention_days)
        purged = await self.repository.purge_older_than(cutoff)
        logger.info("Purged %d audit entries older than %s", purged, cutoff.isoformat())
        return purged
