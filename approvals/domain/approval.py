"""
LicenseApproval domain entity.

An approval request gates a license change. Its status only moves
forward, from pending to approved, rejected or expired, and is then
immutable.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from core.domain.exceptions import ApprovalNotPendingError
from core.domain.value_objects import ApprovalPriority, ApprovalStatus, ApprovalType


@dataclass(frozen=True)
class LicenseApproval:
    """LicenseApproval domain entity."""

    id: uuid.UUID
    license_id: uuid.UUID
    requested_by: str
    approval_type: ApprovalType
    status: ApprovalStatus
    priority: ApprovalPriority
    expires_at: datetime
    created_at: datetime
    updated_at: datetime
    request_data: Dict[str, Any] = field(default_factory=dict)
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejected_by: Optional[str] = None
    rejected_at: Optional[datetime] = None
    decision_reason: Optional[str] = None

    @classmethod
    def create(
        cls,
        license_id: uuid.UUID,
        requested_by: str,
        approval_type: ApprovalType,
        request_data: Dict[str, Any],
        priority: ApprovalPriority,
        now: datetime,
        expiry_days: int = 7,
    ) -> "LicenseApproval":
        """
        Create a pending approval request.

        Args:
            license_id: License the request concerns (may not exist yet)
            requested_by: Requesting user
            approval_type: Kind of change requested
            request_data: Echo of the original request
            priority: Request priority
            now: Submission time
            expiry_days: Days until the request lapses

        Returns:
            Pending LicenseApproval
        """
        return cls(
            id=uuid.uuid4(),
            license_id=license_id,
            requested_by=requested_by,
            approval_type=approval_type,
            status=ApprovalStatus.PENDING,
            priority=priority,
            expires_at=now + timedelta(days=expiry_days),
            created_at=now,
            updated_at=now,
            request_data=dict(request_data or {}),
        )

    @property
    def is_pending(self) -> bool:
        return self.status == ApprovalStatus.PENDING

    def is_expired_at(self, now: datetime) -> bool:
        return now > self.expires_at

    def _require_pending(self) -> None:
        if not self.is_pending:
            raise ApprovalNotPendingError(
                f"Approval request {self.id} is {self.status.value}, not pending"
            )

    def approve(self, approved_by: str, now: datetime, reason: Optional[str] = None) -> "LicenseApproval":
        """Create a new instance decided as approved."""
        self._require_pending()
        return replace(
            self,
            status=ApprovalStatus.APPROVED,
            approved_by=approved_by,
            approved_at=now,
            decision_reason=reason,
            updated_at=now,
        )

    def reject(self, rejected_by: str, now: datetime, reason: Optional[str] = None) -> "LicenseApproval":
        """Create a new instance decided as rejected."""
        self._require_pending()
        return replace(
            self,
            status=ApprovalStatus.REJECTED,
            rejected_by=rejected_by,
            rejected_at=now,
            decision_reason=reason,
            updated_at=now,
        )

    def expire(self, now: datetime) -> "LicenseApproval":
        """Create a new instance marked expired."""
        self._require_pending()
        return replace(self, status=ApprovalStatus.EXPIRED, updated_at=now)
