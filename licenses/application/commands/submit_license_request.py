"""
LicenseRequestCommand.

Command for a user asking an owner for a new license.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from core.domain.value_objects import ApprovalPriority, LicenseType


@dataclass
class LicenseRequestCommand:
    """Command to request a license that an owner must approve."""

    license_type: LicenseType
    issued_to: str
    validity_days: Optional[int] = None
    features: Dict[str, Any] = field(default_factory=dict)
    limits: Dict[str, Any] = field(default_factory=dict)
    justification: Optional[str] = None
    priority: ApprovalPriority = ApprovalPriority.MEDIUM

    def to_request_data(self) -> Dict[str, Any]:
        return {
            "license_type": self.license_type.value,
            "issued_to": self.issued_to,
            "validity_days": self.validity_days,
            "features": dict(self.features),
            "limits": dict(self.limits),
            "justification": self.justification,
        }
