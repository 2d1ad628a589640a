"""
Django implementation of AuditLogRepository port.
"""
from datetime import datetime
import uuid
from typing import List

from asgiref.sync import sync_to_async

from audit.domain.audit_entry import LicenseAuditLogEntry
from audit.infrastructure.models import LicenseAuditLog as LicenseAuditLogModel
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.value_objects import AuditAction


class DjangoAuditLogRepository(AuditLogRepository):
    """Django ORM implementation of AuditLogRepository."""

    def _to_domain(self, model: LicenseAuditLogModel) -> LicenseAuditLogEntry:
        return LicenseAuditLogEntry(
            id=model.id,
            license_id=model.license_id,
            action=AuditAction(model.action),
            performed_by=model.performed_by,
            new_state=dict(model.new_state or {}),
            created_at=model.created_at,
            previous_state=dict(model.previous_state or {}),
            reason=model.reason,
            metadata=dict(model.metadata or {}),
        )

    @sync_to_async
    def append(self, entry: LicenseAuditLogEntry) -> LicenseAuditLogEntry:
        """
        Append an audit entry.

        Args:
            entry: Entry to store

        Returns:
            Stored entry
        """
        model = LicenseAuditLogModel.objects.create(
            id=entry.id,
            license_id=entry.license_id,
            action=entry.action.value,
            performed_by=entry.performed_by,
            previous_state=entry.previous_state,
            new_state=entry.new_state,
            reason=entry.reason,
            metadata=entry.metadata,
            created_at=entry.created_at,
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_license(self, license_id: uuid.UUID) -> List[LicenseAuditLogEntry]:
        models = LicenseAuditLogModel.objects.filter(license_id=license_id).order_by(
            "-created_at"
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_recent(self, limit: int = 50) -> List[LicenseAuditLogEntry]:
        models = LicenseAuditLogModel.objects.order_by("-created_at")[:limit]
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def purge_older_than(self, cutoff: datetime) -> int:
        deleted, _ = LicenseAuditLogModel.objects.filter(created_at__lt=cutoff).delete()
        return deleted
