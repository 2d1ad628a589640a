"""
Auto-approval criteria.

An owner with auto-approval enabled approves any request that satisfies
every criterion they have set. Criteria that are not set impose nothing.
"""
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

from approvals.domain.approval import LicenseApproval
from core.domain.value_objects import ApprovalPriority

# Requests that do not state a validity period are assumed to ask for a year.
DEFAULT_REQUESTED_VALIDITY_DAYS = 365


@dataclass(frozen=True)
class AutoApprovalCriteria:
    """Parsed form of an owner's ``auto_approval_criteria`` setting."""

    max_validity_days: Optional[int] = None
    allowed_license_types: Optional[FrozenSet[str]] = None
    max_priority: Optional[ApprovalPriority] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AutoApprovalCriteria":
        data = data or {}
        allowed = data.get("allowed_license_types")
        max_priority = data.get("max_priority")
        max_validity = data.get("max_validity_days")
        return cls(
            max_validity_days=int(max_validity) if max_validity else None,
            allowed_license_types=frozenset(allowed) if allowed else None,
            max_priority=ApprovalPriority(max_priority) if max_priority else None,
        )

    def is_satisfied_by(self, approval: LicenseApproval) -> bool:
        """
        Check an approval request against every set criterion.

        Args:
            approval: Request to evaluate

        Returns:
            True if all set criteria pass
        """
        request = approval.request_data or {}

        if self.max_validity_days is not None:
            requested_days = request.get("validity_days") or DEFAULT_REQUESTED_VALIDITY_DAYS
            if requested_days > self.max_validity_days:
                return False

        if self.allowed_license_types is not None:
            if request.get("license_type") not in self.allowed_license_types:
                return False

        if self.max_priority is not None:
            if approval.priority.rank > self.max_priority.rank:
                return False

        return True
