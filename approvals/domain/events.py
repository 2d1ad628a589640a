"""
Approval domain events.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from core.domain.events import DomainEvent


class ApprovalSubmitted(DomainEvent):
    """Event raised when an approval request is submitted."""

    def __init__(
        self,
        approval_id: uuid.UUID,
        license_id: uuid.UUID,
        requested_by: str,
        priority: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize ApprovalSubmitted event.

        Args:
            approval_id: Approval UUID
            license_id: License the request concerns
            requested_by: Requesting user
            priority: Request priority
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(approval_id),
            event_type="ApprovalSubmitted",
        )
        self.approval_id = approval_id
        self.license_id = license_id
        self.requested_by = requested_by
        self.priority = priority


class ApprovalProcessed(DomainEvent):
    """Event raised when an approval request is approved or rejected."""

    def __init__(
        self,
        approval_id: uuid.UUID,
        license_id: uuid.UUID,
        status: str,
        processed_by: str,
        automatic: bool = False,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize ApprovalProcessed event.

        Args:
            approval_id: Approval UUID
            license_id: License the request concerns
            status: Resulting status (approved or rejected)
            processed_by: Deciding owner
            automatic: True when decided by auto-approval criteria
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(approval_id),
            event_type="ApprovalProcessed",
        )
        self.approval_id = approval_id
        self.license_id = license_id
        self.status = status
        self.processed_by = processed_by
        self.automatic = automatic


class ApprovalsExpired(DomainEvent):
    """Event raised when the expiry sweep lapses pending requests."""

    def __init__(self, count: int, occurred_at: Optional[datetime] = None):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id="approvals",
            event_type="ApprovalsExpired",
        )
        self.count = count
