"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from core.domain.events import DomainEvent


class LicenseEvent(DomainEvent):
    """Base class for events raised on a single license."""

    def __init__(
        self,
        license_id: uuid.UUID,
        performed_by: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize a license event.

        Args:
            license_id: License UUID
            performed_by: User who caused the event
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(license_id),
            event_type=self.__class__.__name__,
        )
        self.license_id = license_id
        self.performed_by = performed_by


class LicenseCreated(LicenseEvent):
    """Event raised when a license is created."""

    def __init__(
        self,
        license_id: uuid.UUID,
        performed_by: str,
        license_type: str,
        issued_to: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(license_id, performed_by, occurred_at)
        self.license_type = license_type
        self.issued_to = issued_to


class LicenseApproved(LicenseEvent):
    """Event raised when a license is approved."""


class LicenseRejected(LicenseEvent):
    """Event raised when a license is rejected."""

    def __init__(
        self,
        license_id: uuid.UUID,
        performed_by: str,
        reason: Optional[str] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(license_id, performed_by, occurred_at)
        self.reason = reason


class LicenseActivated(LicenseEvent):
    """Event raised when a license is activated."""


class LicenseSuspended(LicenseEvent):
    """Event raised when a license is suspended."""

    def __init__(
        self,
        license_id: uuid.UUID,
        performed_by: str,
        reason: Optional[str] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(license_id, performed_by, occurred_at)
        self.reason = reason


class LicenseReactivated(LicenseEvent):
    """Event raised when a suspended license is reactivated."""


class LicenseRenewed(LicenseEvent):
    """Event raised when a license is renewed."""

    def __init__(
        self,
        license_id: uuid.UUID,
        performed_by: str,
        new_expiration: datetime,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(license_id, performed_by, occurred_at)
        self.new_expiration = new_expiration

    def to_dict(self):
        data = super().to_dict()
        data["new_expiration"] = self.new_expiration.isoformat()
        return data


class LicenseRevoked(LicenseEvent):
    """Event raised when a license is revoked."""

    def __init__(
        self,
        license_id: uuid.UUID,
        performed_by: str,
        reason: Optional[str] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(license_id, performed_by, occurred_at)
        self.reason = reason


class LicenseExpired(LicenseEvent):
    """Event raised when the expiration sweep marks a license expired."""
