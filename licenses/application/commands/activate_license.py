"""
ActivateLicenseCommand.

Command to activate an approved license.
"""
from dataclasses import dataclass


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license by key."""

    license_key: str
    user_id: str
