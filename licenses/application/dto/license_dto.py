"""
License DTOs returned by the license management facade.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from approvals.domain.approval import LicenseApproval
from audit.domain.audit_entry import LicenseAuditLogEntry
from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: uuid.UUID
    license_key: str
    license_type: str
    status: str
    approval_status: str
    issued_to: str
    issued_by: str
    valid_from: datetime
    valid_until: datetime
    features: Dict[str, Any]
    limits: Dict[str, Any]
    created_at: datetime

    @classmethod
    def from_entity(cls, license: License) -> "LicenseDTO":
        return cls(
            id=license.id,
            license_key=license.license_key,
            license_type=license.license_type.value,
            status=license.status.value,
            approval_status=license.approval_status.value,
            issued_to=license.issued_to,
            issued_by=license.issued_by,
            valid_from=license.valid_from,
            valid_until=license.valid_until,
            features=dict(license.features),
            limits=dict(license.limits),
            created_at=license.created_at,
        )


@dataclass
class CreateLicenseResultDTO:
    """DTO for create license response."""

    license: License
    approval: Optional[LicenseApproval] = None

    @property
    def requires_approval(self) -> bool:
        return not self.license.is_approved


@dataclass
class AuditEntryDTO:
    """DTO for a single audit log entry."""

    id: uuid.UUID
    license_id: uuid.UUID
    action: str
    performed_by: str
    reason: Optional[str]
    previous_state: Dict[str, Any]
    new_state: Dict[str, Any]
    created_at: datetime

    @classmethod
    def from_entity(cls, entry: LicenseAuditLogEntry) -> "AuditEntryDTO":
        return cls(
            id=entry.id,
            license_id=entry.license_id,
            action=entry.action.value,
            performed_by=entry.performed_by,
            reason=entry.reason,
            previous_state=dict(entry.previous_state),
            new_state=dict(entry.new_state),
            created_at=entry.created_at,
        )


@dataclass
class LicenseReportDTO:
    """DTO for the owner license report."""

    generated_at: datetime
    total_licenses: int
    licenses_by_status: Dict[str, int]
    licenses_by_type: Dict[str, int]
    pending_approvals: int
    recent_activity: List[AuditEntryDTO] = field(default_factory=list)
