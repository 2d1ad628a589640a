"""
Approval handlers.

Deciding an approval and applying its outcome to the license are two
separate steps; applying an outcome twice has no further effect.
"""
import logging
from typing import Optional

from approvals.application.services.approval_workflow_service import ApprovalWorkflowService
from approvals.domain.approval import LicenseApproval
from audit.application.services.audit_log_service import AuditLogService
from core.domain.clock import Clock, SystemClock
from core.domain.events import EventBus
from core.domain.value_objects import (
    ApprovalStatus,
    AuditAction,
    LicenseApprovalStatus,
    LicenseStatus,
    OwnerPermission,
)
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import license_transitions_total
from licenses.application.commands.process_approval import ProcessApprovalCommand
from licenses.domain.events import LicenseApproved, LicenseRejected
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository
from owners.application.services.owner_access_control import OwnerAccessControlService

logger = logging.getLogger(__name__)

APPROVAL_FIELDS = ("approval_status", "approved_by", "approved_at", "rejection_reason")


class ApprovalOutcomeApplier:
    """Copies a decided approval onto the license it concerns."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        audit_service: AuditLogService,
        clock: Clock = None,
        event_bus: EventBus = None,
    ):
        """Initialize applier with repositories."""
        self.license_repository = license_repository
        self.audit_service = audit_service
        self.clock = clock or SystemClock()
        self.event_bus = event_bus or default_event_bus

    async def apply(self, approval: LicenseApproval) -> Optional[License]:
        """
        Apply an approval decision to its license.

        Args:
            approval: Decided approval

        Returns:
            The license after the outcome is applied, or None if the
            approval references a license that does not exist
        """
        license = await self.license_repository.find_by_id(approval.license_id)
        if not license:
            logger.debug(
                "Approval %s references no stored license %s", approval.id, approval.license_id
            )
            return None

        if approval.status == ApprovalStatus.APPROVED:
            return await self._approve(license, approval)
        if approval.status == ApprovalStatus.REJECTED:
            return await self._reject(license, approval)
        return license

    async def _approve(self, license: License, approval: LicenseApproval) -> License:
        if license.is_approved:
            return license
        if license.status.is_terminal:
            logger.warning(
                "Not approving license %s: it is %s", license.id, license.status.value
            )
            return license

        now = self.clock.now()
        approved = license.approve(approval.approved_by, now)
        await self.license_repository.update_approval_status(
            license.id,
            LicenseApprovalStatus.APPROVED,
            now,
            approved_by=approval.approved_by,
        )

        license_transitions_total.labels(action=AuditAction.APPROVED.value).inc()
        await self.audit_service.record(
            license_id=license.id,
            action=AuditAction.APPROVED,
            performed_by=approval.approved_by,
            previous_state=license.snapshot(*APPROVAL_FIELDS),
            new_state=approved.snapshot(*APPROVAL_FIELDS),
            reason=approval.decision_reason,
            metadata={"approval_id": str(approval.id)},
        )
        await self.event_bus.publish(
            LicenseApproved(
                license_id=license.id,
                performed_by=approval.approved_by,
                occurred_at=now,
            )
        )

        logger.info("License %s approved via approval %s", license.id, approval.id)
        return approved

    async def _reject(self, license: License, approval: LicenseApproval) -> License:
        if license.approval_status == LicenseApprovalStatus.REJECTED:
            return license
        if license.status == LicenseStatus.ACTIVE or license.status.is_terminal:
            logger.warning(
                "Not rejecting license %s: it is %s", license.id, license.status.value
            )
            return license

        now = self.clock.now()
        rejected = license.reject(approval.decision_reason, now)
        await self.license_repository.update_approval_status(
            license.id,
            LicenseApprovalStatus.REJECTED,
            now,
            rejection_reason=approval.decision_reason,
        )

        license_transitions_total.labels(action=AuditAction.REJECTED.value).inc()
        await self.audit_service.record(
            license_id=license.id,
            action=AuditAction.REJECTED,
            performed_by=approval.rejected_by,
            previous_state=license.snapshot(*APPROVAL_FIELDS),
            new_state=rejected.snapshot(*APPROVAL_FIELDS),
            reason=approval.decision_reason,
            metadata={"approval_id": str(approval.id)},
        )
        await self.event_bus.publish(
            LicenseRejected(
                license_id=license.id,
                performed_by=approval.rejected_by,
                reason=approval.decision_reason,
                occurred_at=now,
            )
        )

        logger.info("License %s rejected via approval %s", license.id, approval.id)
        return rejected


class ProcessApprovalHandler:
    """Handler for ProcessApprovalCommand."""

    def __init__(
        self,
        access_control: OwnerAccessControlService,
        approval_workflow: ApprovalWorkflowService,
        outcome_applier: ApprovalOutcomeApplier,
    ):
        """Initialize handler with services."""
        self.access_control = access_control
        self.approval_workflow = approval_workflow
        self.outcome_applier = outcome_applier

    async def handle(self, command: ProcessApprovalCommand) -> LicenseApproval:
        """
        Handle process approval command.

        Args:
            command: ProcessApprovalCommand

        Returns:
            The decided approval

        Raises:
            InsufficientPermissionError: Without can_approve_licenses
            ApprovalNotFoundError: If the approval does not exist
            ApprovalNotPendingError: If the approval was already decided
            ApprovalExpiredError: If the approval has lapsed
        """
        await self.access_control.validate_owner_permission(
            command.processed_by, OwnerPermission.CAN_APPROVE_LICENSES
        )

        approval = await self.approval_workflow.process_approval(
            command.approval_id,
            command.decision,
            command.processed_by,
            command.reason,
        )
        await self.outcome_applier.apply(approval)
        return approval


class AutoProcessApprovalsHandler:
    """Runs the auto-approval sweep and applies every approval it grants."""

    def __init__(
        self,
        approval_workflow: ApprovalWorkflowService,
        outcome_applier: ApprovalOutcomeApplier,
    ):
        self.approval_workflow = approval_workflow
        self.outcome_applier = outcome_applier

    async def handle(self) -> int:
        approved = await self.approval_workflow.auto_process_approvals()
        for approval in approved:
            await self.outcome_applier.apply(approval)
        return len(approved)
