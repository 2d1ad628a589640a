"""
RenewLicenseCommand.

Command to renew (extend) a license.
"""
import uuid
from dataclasses import dataclass


@dataclass
class RenewLicenseCommand:
    """Command to restart a license's validity window."""

    license_id: uuid.UUID
    renewed_by: str
