"""
LicenseAuditLogEntry domain entity.

Audit entries are append-only. They are never updated, and only the
retention purge deletes them.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.value_objects import AuditAction


@dataclass(frozen=True)
class LicenseAuditLogEntry:
    """A single recorded transition of a license."""

    id: uuid.UUID
    license_id: uuid.UUID
    action: AuditAction
    performed_by: str
    new_state: Dict[str, Any]
    created_at: datetime
    previous_state: Dict[str, Any] = field(default_factory=dict)
    reason: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate audit entry."""
        if not self.license_id:
            raise ValueError("License ID is required")
        if not self.performed_by:
            raise ValueError("Audit entries must name who performed the action")

    @classmethod
    def create(
        cls,
        license_id: uuid.UUID,
        action: AuditAction,
        performed_by: str,
        previous_state: Optional[Dict[str, Any]],
        new_state: Dict[str, Any],
        now: datetime,
        reason: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "LicenseAuditLogEntry":
        """Create a new audit entry stamped at ``now``."""
        return cls(
            id=uuid.uuid4(),
            license_id=license_id,
            action=action,
            performed_by=performed_by,
            previous_state=dict(previous_state or {}),
            new_state=dict(new_state),
            created_at=now,
            reason=reason,
            metadata=dict(metadata or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "license_id": str(self.license_id),
            "action": self.action.value,
            "performed_by": self.performed_by,
            "previous_state": self.previous_state,
            "new_state": self.new_state,
            "reason": self.reason,
            "created_at": self.created_at.isoformat(),
        }
