"""
User directory port (interface).

Users are owned by an external identity system; this service only
reads them.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UserRecord:
    """Read-only view of a user."""

    id: str
    role_slug: str
    email: Optional[str] = None


class UserDirectory(ABC):
    """Abstract lookup of users by id."""

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        """
        Find a user by id.

        Args:
            user_id: User reference

        Returns:
            UserRecord or None if the user does not exist
        """
        pass
