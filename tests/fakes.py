"""
In-memory adapters and test doubles for the repository and service ports.
"""
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional
import uuid

from approvals.domain.approval import LicenseApproval
from approvals.ports.approval_repository import ApprovalRepository
from approvals.ports.owner_notifier import OwnerNotifier
from audit.domain.audit_entry import LicenseAuditLogEntry
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.clock import Clock
from core.domain.events import DomainEvent, EventHandler
from core.domain.value_objects import (
    ApprovalStatus,
    LicenseApprovalStatus,
    LicenseStatus,
    LicenseType,
)
from licenses.domain.license import License
from licenses.domain.template import LicenseTemplate
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.license_template_repository import LicenseTemplateRepository
from owners.domain.owner_management import OwnerManagement
from owners.ports.owner_management_repository import OwnerManagementRepository
from owners.ports.user_directory import UserDirectory, UserRecord

EPOCH = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)

OWNER_ROLE = "global:owner"
OWNER = "owner-1"
SECOND_OWNER = "owner-2"
USER = "user-1"
OTHER_USER = "user-2"


class FixedClock(Clock):
    """Clock pinned to an instant that only moves when advanced."""

    def __init__(self, now: datetime = EPOCH):
        self._now = now

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs) -> datetime:
        self._now = self._now + timedelta(**kwargs)
        return self._now


class InMemoryLicenseRepository(LicenseRepository):
    """Dictionary-backed LicenseRepository."""

    def __init__(self):
        self.licenses: Dict[uuid.UUID, License] = {}

    async def save(self, license: License) -> License:
        self.licenses[license.id] = license
        return license

    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        return self.licenses.get(license_id)

    async def find_by_key(self, license_key: str) -> Optional[License]:
        return next(
            (lic for lic in self.licenses.values() if lic.license_key == license_key), None
        )

    async def find_by_user(self, user_id: str) -> List[License]:
        found = [lic for lic in self.licenses.values() if lic.issued_to == user_id]
        return sorted(found, key=lambda lic: lic.created_at, reverse=True)

    async def find_active(self, now: datetime) -> List[License]:
        return [
            lic
            for lic in self.licenses.values()
            if lic.status == LicenseStatus.ACTIVE
            and lic.is_approved
            and lic.is_within_validity(now)
        ]

    async def find_expired(self, now: datetime) -> List[License]:
        return [
            lic
            for lic in self.licenses.values()
            if lic.status in (LicenseStatus.ACTIVE, LicenseStatus.PENDING)
            and lic.valid_until < now
        ]

    async def find_pending_approval(self) -> List[License]:
        found = [
            lic
            for lic in self.licenses.values()
            if lic.approval_status == LicenseApprovalStatus.PENDING
        ]
        return sorted(found, key=lambda lic: lic.created_at)

    async def update_status(
        self, license_id: uuid.UUID, status: LicenseStatus, now: datetime
    ) -> None:
        if license_id in self.licenses:
            self.licenses[license_id] = replace(
                self.licenses[license_id], status=status, updated_at=now
            )

    async def update_approval_status(
        self,
        license_id: uuid.UUID,
        approval_status: LicenseApprovalStatus,
        now: datetime,
        approved_by: Optional[str] = None,
        rejection_reason: Optional[str] = None,
    ) -> None:
        license = self.licenses.get(license_id)
        if not license:
            return
        changes = {"approval_status": approval_status, "updated_at": now}
        if approval_status == LicenseApprovalStatus.APPROVED:
            changes.update(approved_by=approved_by, approved_at=now, rejection_reason=None)
        elif approval_status == LicenseApprovalStatus.REJECTED:
            changes["rejection_reason"] = rejection_reason
        self.licenses[license_id] = replace(license, **changes)

    async def count(self) -> int:
        return len(self.licenses)

    async def count_by_status(self, status: LicenseStatus) -> int:
        return sum(1 for lic in self.licenses.values() if lic.status == status)

    async def count_by_type(self, license_type: LicenseType) -> int:
        return sum(1 for lic in self.licenses.values() if lic.license_type == license_type)

    async def delete(self, license_id: uuid.UUID) -> bool:
        return self.licenses.pop(license_id, None) is not None


class InMemoryLicenseTemplateRepository(LicenseTemplateRepository):
    """Dictionary-backed LicenseTemplateRepository."""

    def __init__(self):
        self.templates: Dict[uuid.UUID, LicenseTemplate] = {}

    async def save(self, template: LicenseTemplate) -> LicenseTemplate:
        self.templates[template.id] = template
        return template

    async def find_by_id(self, template_id: uuid.UUID) -> Optional[LicenseTemplate]:
        return self.templates.get(template_id)

    async def find_by_name(self, name: str) -> Optional[LicenseTemplate]:
        return next((t for t in self.templates.values() if t.name == name), None)

    async def find_active(self) -> List[LicenseTemplate]:
        return sorted(
            (t for t in self.templates.values() if t.is_active), key=lambda t: t.name
        )


class InMemoryApprovalRepository(ApprovalRepository):
    """Dictionary-backed ApprovalRepository."""

    def __init__(self):
        self.approvals: Dict[uuid.UUID, LicenseApproval] = {}

    async def save(self, approval: LicenseApproval) -> LicenseApproval:
        self.approvals[approval.id] = approval
        return approval

    async def find_by_id(self, approval_id: uuid.UUID) -> Optional[LicenseApproval]:
        return self.approvals.get(approval_id)

    async def find_pending(self) -> List[LicenseApproval]:
        pending = [a for a in self.approvals.values() if a.is_pending]
        return sorted(pending, key=lambda a: (-a.priority.rank, a.created_at))

    async def find_by_license(self, license_id: uuid.UUID) -> List[LicenseApproval]:
        found = [a for a in self.approvals.values() if a.license_id == license_id]
        return sorted(found, key=lambda a: a.created_at, reverse=True)

    async def update_if_pending(self, approval: LicenseApproval) -> bool:
        stored = self.approvals.get(approval.id)
        if not stored or not stored.is_pending:
            return False
        self.approvals[approval.id] = approval
        return True

    async def expire_pending_before(self, now: datetime) -> int:
        lapsed = [a for a in self.approvals.values() if a.is_pending and a.expires_at < now]
        for approval in lapsed:
            self.approvals[approval.id] = approval.expire(now)
        return len(lapsed)

    async def count_by_status(self, status: ApprovalStatus) -> int:
        return sum(1 for a in self.approvals.values() if a.status == status)


class InMemoryAuditLogRepository(AuditLogRepository):
    """List-backed AuditLogRepository."""

    def __init__(self):
        self.entries: List[LicenseAuditLogEntry] = []

    async def append(self, entry: LicenseAuditLogEntry) -> LicenseAuditLogEntry:
        self.entries.append(entry)
        return entry

    async def find_by_license(self, license_id: uuid.UUID) -> List[LicenseAuditLogEntry]:
        return self._newest_first(e for e in self.entries if e.license_id == license_id)

    async def find_recent(self, limit: int = 50) -> List[LicenseAuditLogEntry]:
        return self._newest_first(self.entries)[:limit]

    async def purge_older_than(self, cutoff: datetime) -> int:
        kept = [e for e in self.entries if e.created_at >= cutoff]
        purged = len(self.entries) - len(kept)
        self.entries = kept
        return purged

    def actions_for(self, license_id: uuid.UUID) -> List[str]:
        """Actions recorded for a license, oldest first."""
        return [e.action.value for e in self.entries if e.license_id == license_id]

    @staticmethod
    def _newest_first(entries) -> List[LicenseAuditLogEntry]:
        return sorted(reversed(list(entries)), key=lambda e: e.created_at, reverse=True)


class FailingAuditLogRepository(InMemoryAuditLogRepository):
    """Audit repository whose writes always fail."""

    async def append(self, entry: LicenseAuditLogEntry) -> LicenseAuditLogEntry:
        raise RuntimeError("audit store unavailable")


class InMemoryOwnerManagementRepository(OwnerManagementRepository):
    """Dictionary-backed OwnerManagementRepository keyed by owner id."""

    def __init__(self):
        self.owners: Dict[str, OwnerManagement] = {}

    def add(self, owner: OwnerManagement) -> OwnerManagement:
        self.owners[owner.owner_id] = owner
        return owner

    async def find_by_owner_id(self, owner_id: str) -> Optional[OwnerManagement]:
        return self.owners.get(owner_id)

    async def get_or_create_default(self, owner_id: str, now: datetime) -> OwnerManagement:
        if owner_id not in self.owners:
            self.owners[owner_id] = OwnerManagement.create_default(owner_id, now)
        return self.owners[owner_id]

    async def save(self, owner: OwnerManagement) -> OwnerManagement:
        return self.add(owner)

    async def find_all(self) -> List[OwnerManagement]:
        return sorted(self.owners.values(), key=lambda o: o.created_at)

    async def find_with_auto_approval(self) -> List[OwnerManagement]:
        owners = await self.find_all()
        return [o for o in owners if o.settings.auto_approval_enabled]


class FakeUserDirectory(UserDirectory):
    """User directory holding a fixed set of users."""

    def __init__(self):
        self.users: Dict[str, UserRecord] = {}

    def add(self, user_id: str, role_slug: str, email: Optional[str] = None) -> UserRecord:
        self.users[user_id] = UserRecord(id=user_id, role_slug=role_slug, email=email)
        return self.users[user_id]

    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self.users.get(user_id)


class RecordingNotifier(OwnerNotifier):
    """Notifier that remembers every approval it was asked about."""

    def __init__(self):
        self.notified: List[LicenseApproval] = []

    async def notify_owners(self, approval: LicenseApproval) -> None:
        self.notified.append(approval)


class FailingNotifier(OwnerNotifier):
    """Notifier whose delivery always fails."""

    async def notify_owners(self, approval: LicenseApproval) -> None:
        raise ConnectionError("mail server unreachable")


class RecordingEventHandler(EventHandler):
    """Event handler that keeps every event it receives."""

    def __init__(self):
        self.events: List[DomainEvent] = []

    async def handle(self, event: DomainEvent) -> None:
        self.events.append(event)

    @property
    def event_types(self) -> List[str]:
        return [event.event_type for event in self.events]
