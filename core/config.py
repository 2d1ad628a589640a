"""
License governance settings.

Domain tunables are read from the ``LICENSE_GOVERNANCE`` Django setting.
Missing keys fall back to the defaults below.
"""
from dataclasses import dataclass, fields

from django.conf import settings

DEFAULT_OWNER_ROLE_SLUG = "global:owner"


@dataclass(frozen=True)
class GovernanceSettings:
    """Resolved license governance configuration."""

    owner_role_slug: str = DEFAULT_OWNER_ROLE_SLUG
    approval_expiry_days: int = 7
    default_validity_days: int = 365
    renewal_validity_days: int = 365
    report_recent_activity_limit: int = 20
    audit_retention_days: int = 365
    notification_from_email: str = "licensing@localhost"

    @classmethod
    def from_mapping(cls, values: dict) -> "GovernanceSettings":
        """
        Build settings from an upper-case keyed mapping.

        Args:
            values: Mapping such as ``{"APPROVAL_EXPIRY_DAYS": 3}``

        Returns:
            GovernanceSettings with unknown keys ignored
        """
        known = {f.name for f in fields(cls)}
        kwargs = {
            key.lower(): value
            for key, value in (values or {}).items()
            if key.lower() in known
        }
        return cls(**kwargs)


def get_governance_settings() -> GovernanceSettings:
    """Read ``settings.LICENSE_GOVERNANCE`` with defaults applied."""
    return GovernanceSettings.from_mapping(
        getattr(settings, "LICENSE_GOVERNANCE", {})
    )
