"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Union

from core.domain.exceptions import InvalidLicenseStatusError
from core.domain.value_objects import (
    LicenseApprovalStatus,
    LicenseStatus,
    LicenseType,
)

FeatureValue = Union[bool, int, float, str, None]

# Fields that identify a license in every audit snapshot.
SNAPSHOT_ENVELOPE = ("id", "license_key")


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    A time-bounded grant of named features and quota limits to a user.
    This is an immutable value object; transitions return new instances.
    """

    id: uuid.UUID
    license_key: str
    license_type: LicenseType
    status: LicenseStatus
    issued_to: str
    issued_by: str
    valid_from: datetime
    valid_until: datetime
    approval_status: LicenseApprovalStatus
    created_at: datetime
    updated_at: datetime
    features: Dict[str, FeatureValue] = field(default_factory=dict)
    limits: Dict[str, Union[int, float]] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    subscription_id: Optional[str] = None
    parent_license_id: Optional[uuid.UUID] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.license_key:
            raise ValueError("License key is required")
        if not self.issued_to:
            raise ValueError("License must be issued to a user")
        if self.valid_from > self.valid_until:
            raise ValueError("valid_from must not be after valid_until")
        if (
            self.status == LicenseStatus.ACTIVE
            and self.approval_status != LicenseApprovalStatus.APPROVED
        ):
            raise ValueError("An active license must be approved")

    @classmethod
    def create(
        cls,
        license_key: str,
        license_type: LicenseType,
        issued_to: str,
        issued_by: str,
        now: datetime,
        validity_days: int,
        features: Optional[Dict[str, FeatureValue]] = None,
        limits: Optional[Dict[str, Union[int, float]]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        subscription_id: Optional[str] = None,
        parent_license_id: Optional[uuid.UUID] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new pending License entity.

        Args:
            license_key: Generated license key
            license_type: License type
            issued_to: User the license is granted to
            issued_by: Owner issuing the license
            now: Creation time, also the start of validity
            validity_days: Length of the validity window in days
            features: Capability map
            limits: Quota map (-1 means unlimited)
            metadata: Free-form metadata
            subscription_id: Optional subscription foreign key
            parent_license_id: Optional parent license for sub-licenses
            license_id: Optional UUID (generated if not provided)

        Returns:
            License in status pending awaiting approval
        """
        if validity_days < 0:
            raise ValueError("Validity days cannot be negative")
        return cls(
            id=license_id or uuid.uuid4(),
            license_key=license_key,
            license_type=license_type,
            status=LicenseStatus.PENDING,
            issued_to=issued_to,
            issued_by=issued_by,
            valid_from=now,
            valid_until=now + timedelta(days=validity_days),
            approval_status=LicenseApprovalStatus.PENDING,
            created_at=now,
            updated_at=now,
            features=dict(features or {}),
            limits=dict(limits or {}),
            metadata=dict(metadata or {}),
            subscription_id=subscription_id,
            parent_license_id=parent_license_id,
        )

    @property
    def is_approved(self) -> bool:
        return self.approval_status == LicenseApprovalStatus.APPROVED

    def is_within_validity(self, now: datetime) -> bool:
        """Check whether ``now`` lies within [valid_from, valid_until]."""
        return self.valid_from <= now <= self.valid_until

    def approve(self, approved_by: str, now: datetime) -> "License":
        """
        Create a new License instance marked approved.

        Approving an already approved license keeps the original
        approver and timestamp.
        """
        if self.is_approved:
            return self
        return replace(
            self,
            approval_status=LicenseApprovalStatus.APPROVED,
            approved_by=approved_by,
            approved_at=now,
            rejection_reason=None,
            updated_at=now,
        )

    def reject(self, reason: Optional[str], now: datetime) -> "License":
        """Create a new License instance marked rejected."""
        if self.status == LicenseStatus.ACTIVE:
            raise InvalidLicenseStatusError("Cannot reject an active license")
        return replace(
            self,
            approval_status=LicenseApprovalStatus.REJECTED,
            rejection_reason=reason,
            updated_at=now,
        )

    def activate(self, now: datetime) -> "License":
        """
        Create a new License instance with active status.

        Raises:
            InvalidLicenseStatusError: If the license cannot be activated
        """
        if self.status != LicenseStatus.PENDING:
            raise InvalidLicenseStatusError(
                f"Cannot activate a license that is {self.status.value}"
            )
        if not self.is_approved:
            raise InvalidLicenseStatusError("License is not approved")
        return replace(self, status=LicenseStatus.ACTIVE, updated_at=now)

    def suspend(self, now: datetime) -> "License":
        """Create a new License instance with suspended status."""
        if self.status != LicenseStatus.ACTIVE:
            raise InvalidLicenseStatusError(
                f"Can only suspend an active license (license is {self.status.value})"
            )
        return replace(self, status=LicenseStatus.SUSPENDED, updated_at=now)

    def reactivate(self, now: datetime) -> "License":
        """Create a new License instance resumed from suspension."""
        if self.status != LicenseStatus.SUSPENDED:
            raise InvalidLicenseStatusError("Can only reactivate a suspended license")
        return replace(self, status=LicenseStatus.ACTIVE, updated_at=now)

    def revoke(self, now: datetime) -> "License":
        """Create a new License instance with revoked status."""
        if self.status.is_terminal:
            raise InvalidLicenseStatusError(
                f"Cannot revoke a license that is {self.status.value}"
            )
        return replace(self, status=LicenseStatus.REVOKED, updated_at=now)

    def renew(self, now: datetime, validity_days: int) -> "License":
        """
        Create a new License instance with a fresh validity window.

        Renewal restarts the window at ``now`` and forces the license active.
        """
        if self.status.is_terminal:
            raise InvalidLicenseStatusError(
                f"Cannot renew a license that is {self.status.value}"
            )
        if not self.is_approved:
            raise InvalidLicenseStatusError("License is not approved")
        return replace(
            self,
            valid_from=now,
            valid_until=now + timedelta(days=validity_days),
            status=LicenseStatus.ACTIVE,
            updated_at=now,
        )

    def mark_expired(self, now: datetime) -> "License":
        """Create a new License instance with expired status."""
        if self.status.is_terminal:
            raise InvalidLicenseStatusError(
                f"Cannot expire a license that is {self.status.value}"
            )
        return replace(self, status=LicenseStatus.EXPIRED, updated_at=now)

    def snapshot(self, *field_names: str) -> Dict[str, Any]:
        """
        Serialize the identity envelope plus the named fields.

        With no field names the full state is captured.

        Returns:
            JSON-serializable dictionary
        """
        if not field_names:
            field_names = tuple(
                name
                for name in self.__dataclass_fields__
                if name not in ("created_at", "updated_at")
            )
        data = {}
        for name in SNAPSHOT_ENVELOPE + tuple(field_names):
            data[name] = _serialize(getattr(self, name))
        return data


def _serialize(value: Any) -> Any:
    if isinstance(value, (LicenseStatus, LicenseType, LicenseApprovalStatus)):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, dict):
        return dict(value)
    return value
