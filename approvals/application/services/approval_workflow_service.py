"""
Approval workflow service.

Manages approval requests: submission with immediate auto-approval,
manual decisions, expiry, and batch auto-processing. Deciding an
approval never touches the license it concerns; the lifecycle
handlers apply the outcome as a separate step.
"""
import logging
from typing import Any, Dict, List, Optional
import uuid

from approvals.domain.approval import LicenseApproval
from approvals.domain.auto_approval import AutoApprovalCriteria
from approvals.domain.events import ApprovalProcessed, ApprovalsExpired, ApprovalSubmitted
from approvals.ports.approval_repository import ApprovalRepository
from approvals.ports.owner_notifier import OwnerNotifier
from core.domain.clock import Clock, SystemClock
from core.domain.events import EventBus
from core.domain.exceptions import (
    ApprovalExpiredError,
    ApprovalNotFoundError,
    ApprovalNotPendingError,
)
from core.domain.value_objects import (
    ApprovalDecision,
    ApprovalPriority,
    ApprovalStatus,
    ApprovalType,
)
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import (
    approvals_auto_approved_total,
    approvals_expired_total,
    approvals_processed_total,
    approvals_submitted_total,
    notification_failures_total,
)
from owners.ports.owner_management_repository import OwnerManagementRepository

logger = logging.getLogger(__name__)

AUTO_APPROVAL_REASON = "Auto-approved based on criteria"


class ApprovalWorkflowService:
    """Service for the license approval workflow."""

    def __init__(
        self,
        approval_repository: ApprovalRepository,
        owner_repository: OwnerManagementRepository,
        notifier: OwnerNotifier,
        clock: Clock = None,
        event_bus: EventBus = None,
        expiry_days: int = 7,
    ):
        """Initialize service with repositories and collaborators."""
        self.approval_repository = approval_repository
        self.owner_repository = owner_repository
        self.notifier = notifier
        self.clock = clock or SystemClock()
        self.event_bus = event_bus or default_event_bus
        self.expiry_days = expiry_days

    async def submit_approval(
        self,
        license_id: uuid.UUID,
        requested_by: str,
        approval_type: ApprovalType,
        request_data: Dict[str, Any],
        priority: ApprovalPriority = ApprovalPriority.MEDIUM,
    ) -> LicenseApproval:
        """
        Submit a new approval request.

        The request is checked against auto-approval criteria straight
        away, then owners are notified.

        Args:
            license_id: License the request concerns
            requested_by: Requesting user
            approval_type: Kind of change requested
            request_data: Echo of the original request
            priority: Request priority

        Returns:
            The stored approval, already approved if auto-approval matched
        """
        logger.info(
            "Submitting approval request",
            extra={
                "license_id": str(license_id),
                "requested_by": requested_by,
                "approval_type": approval_type.value,
                "priority": priority.value,
            },
        )

        approval = LicenseApproval.create(
            license_id=license_id,
            requested_by=requested_by,
            approval_type=approval_type,
            request_data=request_data,
            priority=priority,
            now=self.clock.now(),
            expiry_days=self.expiry_days,
        )
        saved = await self.approval_repository.save(approval)
        approvals_submitted_total.labels(
            approval_type=approval_type.value, priority=priority.value
        ).inc()

        saved = await self.check_auto_approval(saved)

        await self._notify_owners(saved)

        await self.event_bus.publish(
            ApprovalSubmitted(
                approval_id=saved.id,
                license_id=saved.license_id,
                requested_by=requested_by,
                priority=priority.value,
                occurred_at=saved.created_at,
            )
        )

        logger.info("Approval request %s submitted (%s)", saved.id, saved.status.value)
        return saved

    async def process_approval(
        self,
        approval_id: uuid.UUID,
        decision: ApprovalDecision,
        processed_by: str,
        reason: Optional[str] = None,
    ) -> LicenseApproval:
        """
        Approve or reject a pending request.

        Args:
            approval_id: Approval UUID
            decision: approve or reject
            processed_by: Deciding owner
            reason: Optional reason recorded with the decision

        Returns:
            The decided approval

        Raises:
            ApprovalNotFoundError: If the approval does not exist
            ApprovalNotPendingError: If it was already decided or expired
            ApprovalExpiredError: If its expiry has passed
        """
        logger.info(
            "Processing approval %s: %s by %s", approval_id, decision.value, processed_by
        )

        approval = await self.approval_repository.find_by_id(approval_id)
        if not approval:
            raise ApprovalNotFoundError(f"Approval request {approval_id} not found")

        if not approval.is_pending:
            raise ApprovalNotPendingError()

        now = self.clock.now()
        if approval.is_expired_at(now):
            raise ApprovalExpiredError()

        if decision == ApprovalDecision.APPROVE:
            decided = approval.approve(processed_by, now, reason)
        else:
            decided = approval.reject(processed_by, now, reason)

        if not await self.approval_repository.update_if_pending(decided):
            raise ApprovalNotPendingError()

        approvals_processed_total.labels(status=decided.status.value).inc()
        await self.event_bus.publish(
            ApprovalProcessed(
                approval_id=decided.id,
                license_id=decided.license_id,
                status=decided.status.value,
                processed_by=processed_by,
                occurred_at=decided.updated_at,
            )
        )

        logger.info("Approval %s processed: %s", approval_id, decided.status.value)
        return decided

    async def get_approval(self, approval_id: uuid.UUID) -> LicenseApproval:
        approval = await self.approval_repository.find_by_id(approval_id)
        if not approval:
            raise ApprovalNotFoundError(f"Approval request {approval_id} not found")
        return approval

    async def get_approval_queue(self) -> List[LicenseApproval]:
        """Pending approvals, highest priority first."""
        return await self.approval_repository.find_pending()

    async def count_pending(self) -> int:
        return await self.approval_repository.count_by_status(ApprovalStatus.PENDING)

    async def expire_old_approvals(self) -> int:
        """
        Expire every pending approval past its expiry.

        Safe to re-run; already decided approvals are never touched.

        Returns:
            Number of approvals expired
        """
        logger.info("Expiring old approvals")
        now = self.clock.now()
        count = await self.approval_repository.expire_pending_before(now)
        if count:
            approvals_expired_total.inc(count)
            await self.event_bus.publish(ApprovalsExpired(count=count, occurred_at=now))
        logger.info("Expired %d old approval(s)", count)
        return count

    async def auto_process_approvals(self) -> List[LicenseApproval]:
        """
        Apply auto-approval to every pending approval.

        Returns:
            Approvals that were approved by this run
        """
        logger.info("Auto-processing approvals")
        pending = await self.approval_repository.find_pending()

        approved = []
        for approval in pending:
            result = await self.check_auto_approval(approval)
            if result.status == ApprovalStatus.APPROVED and approval.is_pending:
                approved.append(result)

        logger.info(
            "Auto-processing completed: %d of %d approved", len(approved), len(pending)
        )
        return approved

    async def check_auto_approval(self, approval: LicenseApproval) -> LicenseApproval:
        """
        Approve a request on behalf of the first owner whose criteria match.

        Approvals that are no longer pending, or already past their
        expiry, are returned unchanged.

        Args:
            approval: Request to evaluate

        Returns:
            The approval, approved if an owner's criteria matched
        """
        now = self.clock.now()
        if not approval.is_pending or approval.is_expired_at(now):
            return approval

        owners = await self.owner_repository.find_with_auto_approval()
        for owner in owners:
            if not owner.settings.auto_approval_enabled:
                continue

            criteria = AutoApprovalCriteria.from_dict(owner.settings.auto_approval_criteria)
            if not criteria.is_satisfied_by(approval):
                continue

            approved = approval.approve(owner.owner_id, now, AUTO_APPROVAL_REASON)
            if not await self.approval_repository.update_if_pending(approved):
                # Decided concurrently; report the stored outcome.
                return await self.approval_repository.find_by_id(approval.id) or approval

            approvals_auto_approved_total.inc()
            approvals_processed_total.labels(status=approved.status.value).inc()
            await self.event_bus.publish(
                ApprovalProcessed(
                    approval_id=approved.id,
                    license_id=approved.license_id,
                    status=approved.status.value,
                    processed_by=owner.owner_id,
                    automatic=True,
                    occurred_at=approved.updated_at,
                )
            )
            logger.info("Auto-approved approval %s for owner %s", approval.id, owner.owner_id)
            return approved

        return approval

    async def _notify_owners(self, approval: LicenseApproval) -> None:
        try:
            await self.notifier.notify_owners(approval)
        except Exception as e:  # pylint: disable=broad-exception-caught
            notification_failures_total.inc()
            logger.warning(
                "Failed to notify owners about approval %s: %s",
                approval.id,
                e,
                exc_info=True,
            )
