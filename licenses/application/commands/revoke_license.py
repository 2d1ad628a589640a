"""
RevokeLicenseCommand.

Command to revoke a license permanently.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class RevokeLicenseCommand:
    """Command to revoke a license."""

    license_id: uuid.UUID
    revoked_by: str
    reason: Optional[str] = None
