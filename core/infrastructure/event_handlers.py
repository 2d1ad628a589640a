"""
Event handlers for domain events.

These handlers process domain events for side effects that are not part
of the operation itself, such as structured activity logging.
"""

import logging

from approvals.domain.events import ApprovalProcessed, ApprovalsExpired, ApprovalSubmitted
from core.domain.events import DomainEvent, EventHandler
from licenses.domain.events import (
    LicenseActivated,
    LicenseApproved,
    LicenseCreated,
    LicenseExpired,
    LicenseReactivated,
    LicenseRejected,
    LicenseRenewed,
    LicenseRevoked,
    LicenseSuspended,
)

logger = logging.getLogger(__name__)

LICENSE_EVENTS = (
    LicenseCreated,
    LicenseApproved,
    LicenseRejected,
    LicenseActivated,
    LicenseSuspended,
    LicenseReactivated,
    LicenseRenewed,
    LicenseRevoked,
    LicenseExpired,
)

APPROVAL_EVENTS = (ApprovalSubmitted, ApprovalProcessed, ApprovalsExpired)


class ActivityLogEventHandler(EventHandler):
    """
    Event handler for activity logging.

    Emits one structured log record per domain event.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for activity logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Domain event: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
                "performed_by": getattr(event, "performed_by", None),
            },
        )


activity_handler = ActivityLogEventHandler()


def register_event_handlers(bus=None):
    """Register all event handlers with the event bus."""
    if bus is None:
        from core.infrastructure.events import event_bus as bus

    for event_type in LICENSE_EVENTS + APPROVAL_EVENTS:
        bus.subscribe(event_type, activity_handler)

    logger.info("Event handlers registered")
