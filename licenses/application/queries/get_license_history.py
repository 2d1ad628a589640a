"""
GetLicenseHistoryQuery.

Query for the audit trail of one license.
"""
import uuid
from dataclasses import dataclass


@dataclass
class GetLicenseHistoryQuery:
    """Query to list a license's audit entries."""

    license_id: uuid.UUID
    user_id: str
