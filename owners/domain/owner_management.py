"""
OwnerManagement domain entity.

One record per owner user, holding the owner's permission flags,
approval settings and the users they have delegated to.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from core.domain.value_objects import OwnerPermission


def default_permissions() -> Dict[str, bool]:
    """Permissive defaults granted to a freshly bootstrapped owner."""
    return {permission.value: True for permission in OwnerPermission}


def default_notification_preferences() -> Dict[str, bool]:
    return {
        "email_on_approval_request": True,
        "email_on_license_expiry": True,
        "email_on_suspicious_activity": True,
    }


@dataclass(frozen=True)
class OwnerSettings:
    """Approval and notification settings of an owner."""

    auto_approval_enabled: bool = False
    auto_approval_criteria: Dict[str, Any] = field(default_factory=dict)
    notification_preferences: Dict[str, bool] = field(
        default_factory=default_notification_preferences
    )
    approval_timeout_days: int = 7

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "OwnerSettings":
        data = data or {}
        preferences = default_notification_preferences()
        preferences.update(data.get("notification_preferences") or {})
        return cls(
            auto_approval_enabled=bool(data.get("auto_approval_enabled", False)),
            auto_approval_criteria=dict(data.get("auto_approval_criteria") or {}),
            notification_preferences=preferences,
            approval_timeout_days=int(data.get("approval_timeout_days", 7)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "auto_approval_enabled": self.auto_approval_enabled,
            "auto_approval_criteria": dict(self.auto_approval_criteria),
            "notification_preferences": dict(self.notification_preferences),
            "approval_timeout_days": self.approval_timeout_days,
        }


@dataclass(frozen=True)
class OwnerManagement:
    """OwnerManagement domain entity."""

    id: uuid.UUID
    owner_id: str
    permissions: Dict[str, bool]
    settings: OwnerSettings
    created_at: datetime
    updated_at: datetime
    delegated_users: Tuple[str, ...] = ()

    @classmethod
    def create_default(cls, owner_id: str, now: datetime) -> "OwnerManagement":
        """Create a record with permissive defaults and auto-approval off."""
        return cls(
            id=uuid.uuid4(),
            owner_id=owner_id,
            permissions=default_permissions(),
            settings=OwnerSettings(),
            created_at=now,
            updated_at=now,
        )

    def has_permission(self, permission: OwnerPermission) -> bool:
        return bool(self.permissions.get(permission.value, False))

    def is_delegated(self, user_id: str) -> bool:
        return user_id in self.delegated_users

    def with_delegate(self, user_id: str, now: datetime) -> "OwnerManagement":
        if self.is_delegated(user_id):
            return self
        return replace(
            self, delegated_users=self.delegated_users + (user_id,), updated_at=now
        )

    def without_delegate(self, user_id: str, now: datetime) -> "OwnerManagement":
        return replace(
            self,
            delegated_users=tuple(u for u in self.delegated_users if u != user_id),
            updated_at=now,
        )

    def with_permissions(self, changes: Dict[str, bool], now: datetime) -> "OwnerManagement":
        unknown = set(changes) - {p.value for p in OwnerPermission}
        if unknown:
            raise ValueError(f"Unknown permissions: {', '.join(sorted(unknown))}")
        return replace(self, permissions={**self.permissions, **changes}, updated_at=now)

    def with_auto_approval(
        self, enabled: bool, criteria: Dict[str, Any], now: datetime
    ) -> "OwnerManagement":
        settings = replace(
            self.settings,
            auto_approval_enabled=enabled,
            auto_approval_criteria=dict(criteria) if enabled else {},
        )
        return replace(self, settings=settings, updated_at=now)


@dataclass(frozen=True)
class OwnerPrincipal:
    """
    Capability returned by a successful owner permission check.

    Carries the verified identity and permission set so callers do not
    have to re-fetch the user for follow-up checks.
    """

    user_id: str
    role_slug: str
    permissions: Dict[str, bool]

    def can(self, permission: OwnerPermission) -> bool:
        return bool(self.permissions.get(permission.value, False))
