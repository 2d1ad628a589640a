"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. The enumerations below are closed: code that
branches on them is expected to handle every member.
"""
from enum import Enum


class LicenseType(Enum):
    """License type value object."""

    COMMUNITY = "community"
    TRIAL = "trial"
    ENTERPRISE = "enterprise"
    CUSTOM = "custom"

    def __str__(self) -> str:
        """Return type as string."""
        return self.value


class LicenseStatus(Enum):
    """License status value object."""

    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    EXPIRED = "expired"
    REVOKED = "revoked"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value

    @property
    def is_terminal(self) -> bool:
        """Revoked and expired licenses never change status again."""
        return self in (LicenseStatus.REVOKED, LicenseStatus.EXPIRED)


class LicenseApprovalStatus(Enum):
    """Approval state carried on the license itself."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    def __str__(self) -> str:
        """Return approval status as string."""
        return self.value


class ApprovalStatus(Enum):
    """Status of an approval request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"

    def __str__(self) -> str:
        """Return approval status as string."""
        return self.value


class ApprovalType(Enum):
    """Kind of change an approval request gates."""

    CREATION = "creation"
    RENEWAL = "renewal"
    MODIFICATION = "modification"
    REVOCATION = "revocation"

    def __str__(self) -> str:
        """Return approval type as string."""
        return self.value


class ApprovalPriority(Enum):
    """Approval priority, ordered low < medium < high < critical."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    def __str__(self) -> str:
        """Return priority as string."""
        return self.value

    @property
    def rank(self) -> int:
        """Numeric rank used for ordering and auto-approval criteria."""
        return _PRIORITY_RANKS[self]


_PRIORITY_RANKS = {
    ApprovalPriority.LOW: 1,
    ApprovalPriority.MEDIUM: 2,
    ApprovalPriority.HIGH: 3,
    ApprovalPriority.CRITICAL: 4,
}


class ApprovalDecision(Enum):
    """Decision taken on a pending approval."""

    APPROVE = "approve"
    REJECT = "reject"

    def __str__(self) -> str:
        return self.value


class AuditAction(Enum):
    """Actions recorded in the license audit log."""

    CREATED = "created"
    ACTIVATED = "activated"
    SUSPENDED = "suspended"
    REACTIVATED = "reactivated"
    RENEWED = "renewed"
    REVOKED = "revoked"
    EXPIRED = "expired"
    MODIFIED = "modified"
    APPROVED = "approved"
    REJECTED = "rejected"

    def __str__(self) -> str:
        return self.value


class OwnerPermission(Enum):
    """Per-action permission flags held by an owner."""

    CAN_CREATE_LICENSES = "can_create_licenses"
    CAN_APPROVE_LICENSES = "can_approve_licenses"
    CAN_REVOKE_LICENSES = "can_revoke_licenses"
    CAN_MANAGE_TEMPLATES = "can_manage_templates"
    CAN_DELEGATE_PERMISSIONS = "can_delegate_permissions"
    CAN_VIEW_AUDIT_LOGS = "can_view_audit_logs"
    CAN_MANAGE_SUBSCRIPTIONS = "can_manage_subscriptions"

    def __str__(self) -> str:
        return self.value
