"""
License reporting handlers.

Read-only views for owners holding can_view_audit_logs.
"""
import logging
from typing import List

from approvals.application.services.approval_workflow_service import ApprovalWorkflowService
from audit.application.services.audit_log_service import AuditLogService
from core.domain.clock import Clock, SystemClock
from core.domain.exceptions import LicenseNotFoundError
from core.domain.value_objects import LicenseStatus, LicenseType, OwnerPermission
from licenses.application.dto.license_dto import AuditEntryDTO, LicenseReportDTO
from licenses.application.queries.generate_license_report import GenerateLicenseReportQuery
from licenses.application.queries.get_license_history import GetLicenseHistoryQuery
from licenses.ports.license_repository import LicenseRepository
from owners.application.services.owner_access_control import OwnerAccessControlService

logger = logging.getLogger(__name__)


class GenerateLicenseReportHandler:
    """Handler for GenerateLicenseReportQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        approval_workflow: ApprovalWorkflowService,
        audit_service: AuditLogService,
        access_control: OwnerAccessControlService,
        clock: Clock = None,
        recent_activity_limit: int = 20,
    ):
        """Initialize handler with repositories and services."""
        self.license_repository = license_repository
        self.approval_workflow = approval_workflow
        self.audit_service = audit_service
        self.access_control = access_control
        self.clock = clock or SystemClock()
        self.recent_activity_limit = recent_activity_limit

    async def handle(self, query: GenerateLicenseReportQuery) -> LicenseReportDTO:
        """
        Handle generate report query.

        Args:
            query: GenerateLicenseReportQuery

        Returns:
            LicenseReportDTO with totals, breakdowns and recent activity

        Raises:
            InsufficientPermissionError: Without can_view_audit_logs
        """
        await self.access_control.validate_owner_permission(
            query.owner_id, OwnerPermission.CAN_VIEW_AUDIT_LOGS
        )

        by_status = {}
        for status in LicenseStatus:
            by_status[status.value] = await self.license_repository.count_by_status(status)

        by_type = {}
        for license_type in LicenseType:
            by_type[license_type.value] = await self.license_repository.count_by_type(
                license_type
            )

        pending = await self.approval_workflow.count_pending()
        recent = await self.audit_service.get_recent_activity(self.recent_activity_limit)

        return LicenseReportDTO(
            generated_at=self.clock.now(),
            total_licenses=await self.license_repository.count(),
            licenses_by_status=by_status,
            licenses_by_type=by_type,
            pending_approvals=pending,
            recent_activity=[AuditEntryDTO.from_entity(entry) for entry in recent],
        )


class GetLicenseHistoryHandler:
    """Handler for GetLicenseHistoryQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        audit_service: AuditLogService,
        access_control: OwnerAccessControlService,
    ):
        self.license_repository = license_repository
        self.audit_service = audit_service
        self.access_control = access_control

    async def handle(self, query: GetLicenseHistoryQuery) -> List[AuditEntryDTO]:
        await self.access_control.validate_owner_permission(
            query.user_id, OwnerPermission.CAN_VIEW_AUDIT_LOGS
        )

        if not await self.license_repository.find_by_id(query.license_id):
            raise LicenseNotFoundError(f"License {query.license_id} not found")

        entries = await self.audit_service.get_license_history(query.license_id)
        return [AuditEntryDTO.from_entity(entry) for entry in entries]
