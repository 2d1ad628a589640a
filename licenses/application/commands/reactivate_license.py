"""
ReactivateLicenseCommand.

Command to resume a suspended license.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class ReactivateLicenseCommand:
    """Command to reactivate a suspended license."""

    license_id: uuid.UUID
    reactivated_by: str
    reason: Optional[str] = None
