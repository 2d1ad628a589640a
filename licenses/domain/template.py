"""
LicenseTemplate domain entity.

Templates carry reusable defaults for new licenses. They are read-only
while a license is being created from them.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.value_objects import LicenseType


@dataclass(frozen=True)
class LicenseTemplate:
    """LicenseTemplate domain entity."""

    id: uuid.UUID
    name: str
    license_type: LicenseType
    created_by: str
    created_at: datetime
    updated_at: datetime
    description: str = ""
    default_features: Dict[str, Any] = field(default_factory=dict)
    default_limits: Dict[str, Any] = field(default_factory=dict)
    default_validity_days: int = 365
    requires_approval: bool = True
    is_active: bool = True

    def __post_init__(self):
        """Validate template entity."""
        if not self.name or not self.name.strip():
            raise ValueError("Template name cannot be empty")
        if self.default_validity_days < 1:
            raise ValueError("Default validity must be at least 1 day")

    @classmethod
    def create(
        cls,
        name: str,
        license_type: LicenseType,
        created_by: str,
        now: datetime,
        description: str = "",
        default_features: Optional[Dict[str, Any]] = None,
        default_limits: Optional[Dict[str, Any]] = None,
        default_validity_days: int = 365,
        requires_approval: bool = True,
        template_id: Optional[uuid.UUID] = None,
    ) -> "LicenseTemplate":
        """Create a new active LicenseTemplate entity."""
        return cls(
            id=template_id or uuid.uuid4(),
            name=name,
            license_type=license_type,
            created_by=created_by,
            created_at=now,
            updated_at=now,
            description=description,
            default_features=dict(default_features or {}),
            default_limits=dict(default_limits or {}),
            default_validity_days=default_validity_days,
            requires_approval=requires_approval,
        )
