"""
License approval repository port (interface).
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
import uuid

from approvals.domain.approval import LicenseApproval
from core.domain.value_objects import ApprovalStatus


class ApprovalRepository(ABC):
    """Abstract repository for LicenseApproval entities."""

    @abstractmethod
    async def save(self, approval: LicenseApproval) -> LicenseApproval:
        """
        Save an approval entity.

        Args:
            approval: LicenseApproval to save

        Returns:
            Saved approval
        """
        pass

    @abstractmethod
    async def find_by_id(self, approval_id: uuid.UUID) -> Optional[LicenseApproval]:
        """
        Find an approval by ID.

        Returns:
            LicenseApproval or None if not found
        """
        pass

    @abstractmethod
    async def find_pending(self) -> List[LicenseApproval]:
        """Find pending approvals, highest priority first, then oldest first."""
        pass

    @abstractmethod
    async def find_by_license(self, license_id: uuid.UUID) -> List[LicenseApproval]:
        """Find approvals for a license, newest first."""
        pass

    @abstractmethod
    async def update_if_pending(self, approval: LicenseApproval) -> bool:
        """
        Store a decided approval only if the stored row is still pending.

        Returns:
            True if the row was updated, False if it had already left
            the pending state
        """
        pass

    @abstractmethod
    async def expire_pending_before(self, now: datetime) -> int:
        """
        Mark every pending approval with ``expires_at < now`` expired.

        Returns:
            Number of approvals expired
        """
        pass

    @abstractmethod
    async def count_by_status(self, status: ApprovalStatus) -> int:
        """Count approvals with a status."""
        pass
