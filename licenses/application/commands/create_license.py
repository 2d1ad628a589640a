"""
CreateLicenseCommand.

Command to create a license, optionally from a template.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from core.domain.value_objects import LicenseType


@dataclass
class CreateLicenseCommand:
    """
    Command to create a license.

    Features and limits given here override the template's defaults.
    """

    license_type: LicenseType
    issued_to: str
    template_id: Optional[uuid.UUID] = None
    validity_days: Optional[int] = None
    features: Dict[str, Any] = field(default_factory=dict)
    limits: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    subscription_id: Optional[str] = None
    parent_license_id: Optional[uuid.UUID] = None
    skip_approval: bool = False
    custom_prefix: Optional[str] = None

    def to_request_data(self) -> Dict[str, Any]:
        """Echo of the request stored on the approval."""
        return {
            "license_type": self.license_type.value,
            "issued_to": self.issued_to,
            "template_id": str(self.template_id) if self.template_id else None,
            "validity_days": self.validity_days,
            "features": dict(self.features),
            "limits": dict(self.limits),
            "subscription_id": self.subscription_id,
        }
