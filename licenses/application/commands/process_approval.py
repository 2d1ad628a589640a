"""
ProcessApprovalCommand.

Command to approve or reject a pending approval request.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import ApprovalDecision


@dataclass
class ProcessApprovalCommand:
    """Command to decide an approval request."""

    approval_id: uuid.UUID
    decision: ApprovalDecision
    processed_by: str
    reason: Optional[str] = None
