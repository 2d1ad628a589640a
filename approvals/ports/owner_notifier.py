"""
Owner notifier port (interface).
"""
from abc import ABC, abstractmethod

from approvals.domain.approval import LicenseApproval


class OwnerNotifier(ABC):
    """Tells owners that an approval request awaits them."""

    @abstractmethod
    async def notify_owners(self, approval: LicenseApproval) -> None:
        """
        Notify owners about a new approval request.

        Callers treat delivery as best-effort and do not propagate
        failures raised here.

        Args:
            approval: The submitted approval request
        """
        pass
