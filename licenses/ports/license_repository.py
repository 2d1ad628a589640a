"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
import uuid

from core.domain.value_objects import (
    LicenseApprovalStatus,
    LicenseStatus,
    LicenseType,
)
from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    There is no version column: concurrent status updates on the same
    license resolve last-write-wins.
    """

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Insert or update a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_key(self, license_key: str) -> Optional[License]:
        """
        Find a license by its key.

        Args:
            license_key: License key string

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: str) -> List[License]:
        """
        Find all licenses issued to a user, newest first.

        Args:
            user_id: User reference

        Returns:
            List of License entities
        """
        pass

    @abstractmethod
    async def find_active(self, now: datetime) -> List[License]:
        """
        Find licenses that are active, approved and within validity.

        Args:
            now: Instant to evaluate the validity window at

        Returns:
            List of License entities
        """
        pass

    @abstractmethod
    async def find_expired(self, now: datetime) -> List[License]:
        """
        Find active or pending licenses whose validity has elapsed.

        Args:
            now: Instant to evaluate against

        Returns:
            List of License entities
        """
        pass

    @abstractmethod
    async def find_pending_approval(self) -> List[License]:
        """Find licenses awaiting approval, oldest first."""
        pass

    @abstractmethod
    async def update_status(
        self, license_id: uuid.UUID, status: LicenseStatus, now: datetime
    ) -> None:
        """
        Overwrite the status of a license.

        Args:
            license_id: License UUID
            status: New status
            now: Update timestamp
        """
        pass

    @abstractmethod
    async def update_approval_status(
        self,
        license_id: uuid.UUID,
        approval_status: LicenseApprovalStatus,
        now: datetime,
        approved_by: Optional[str] = None,
        rejection_reason: Optional[str] = None,
    ) -> None:
        """
        Overwrite the approval status of a license.

        Approver and timestamp are recorded on approval; the reason
        is recorded on rejection.
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all licenses."""
        pass

    @abstractmethod
    async def count_by_status(self, status: LicenseStatus) -> int:
        """Count licenses with a status."""
        pass

    @abstractmethod
    async def count_by_type(self, license_type: LicenseType) -> int:
        """Count licenses of a type."""
        pass

    @abstractmethod
    async def delete(self, license_id: uuid.UUID) -> bool:
        """
        Delete a license together with its approvals and audit entries.

        Returns:
            True if a license was deleted
        """
        pass
