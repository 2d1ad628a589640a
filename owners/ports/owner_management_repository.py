"""
Owner management repository port (interface).
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from owners.domain.owner_management import OwnerManagement


class OwnerManagementRepository(ABC):
    """Abstract repository for OwnerManagement entities."""

    @abstractmethod
    async def find_by_owner_id(self, owner_id: str) -> Optional[OwnerManagement]:
        """
        Find the management record of an owner.

        Args:
            owner_id: Owner user reference

        Returns:
            OwnerManagement or None if absent
        """
        pass

    @abstractmethod
    async def get_or_create_default(self, owner_id: str, now: datetime) -> OwnerManagement:
        """
        Return the owner's record, creating a default one if absent.

        Implementations must be safe against two callers bootstrapping
        the same owner at once (upsert, not read-then-insert).
        """
        pass

    @abstractmethod
    async def save(self, owner: OwnerManagement) -> OwnerManagement:
        """Persist an owner management record."""
        pass

    @abstractmethod
    async def find_all(self) -> List[OwnerManagement]:
        """Find all owner records, oldest first."""
        pass

    @abstractmethod
    async def find_with_auto_approval(self) -> List[OwnerManagement]:
        """Find owners with auto-approval enabled, oldest first."""
        pass
