"""
CreateLicenseTemplateCommand.

Command to create a reusable license template.
"""
from dataclasses import dataclass, field
from typing import Any, Dict

from core.domain.value_objects import LicenseType


@dataclass
class CreateLicenseTemplateCommand:
    """Command to create a license template."""

    name: str
    license_type: LicenseType
    description: str = ""
    default_features: Dict[str, Any] = field(default_factory=dict)
    default_limits: Dict[str, Any] = field(default_factory=dict)
    default_validity_days: int = 365
    requires_approval: bool = True
