"""
GenerateLicenseReportQuery.

Query for an owner's overview of licenses and approvals.
"""
from dataclasses import dataclass


@dataclass
class GenerateLicenseReportQuery:
    """Query to build the license report."""

    owner_id: str
