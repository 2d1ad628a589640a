"""
License management facade.

Single entry point coordinating access control, approvals, the license
store and the audit log for every license operation.
"""
import logging
from typing import Iterable, List, Optional
import uuid

from approvals.application.services.approval_workflow_service import ApprovalWorkflowService
from approvals.domain.approval import LicenseApproval
from audit.application.services.audit_log_service import AuditLogService
from core.config import GovernanceSettings
from core.domain.clock import Clock, SystemClock
from core.domain.events import EventBus
from core.domain.value_objects import ApprovalDecision, OwnerPermission
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.create_license_template import (
    CreateLicenseTemplateCommand,
)
from licenses.application.commands.process_approval import ProcessApprovalCommand
from licenses.application.commands.reactivate_license import ReactivateLicenseCommand
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.commands.submit_license_request import LicenseRequestCommand
from licenses.application.commands.suspend_license import SuspendLicenseCommand
from licenses.application.dto.license_dto import (
    AuditEntryDTO,
    CreateLicenseResultDTO,
    LicenseReportDTO,
)
from licenses.application.handlers.create_license_handler import (
    CreateLicenseHandler,
    CreateLicenseTemplateHandler,
    SubmitLicenseRequestHandler,
)
from licenses.application.handlers.license_lifecycle_handlers import (
    ActivateLicenseHandler,
    ExpireStaleLicensesHandler,
    ReactivateLicenseHandler,
    RenewLicenseHandler,
    RevokeLicenseHandler,
    SuspendLicenseHandler,
)
from licenses.application.handlers.license_report_handlers import (
    GenerateLicenseReportHandler,
    GetLicenseHistoryHandler,
)
from licenses.application.handlers.process_approval_handler import (
    ApprovalOutcomeApplier,
    AutoProcessApprovalsHandler,
    ProcessApprovalHandler,
)
from licenses.application.queries.generate_license_report import GenerateLicenseReportQuery
from licenses.application.queries.get_license_history import GetLicenseHistoryQuery
from licenses.application.services.license_validation_service import (
    LicenseValidationService,
)
from licenses.domain.license import License
from licenses.domain.services import UsageData, ValidationResult
from licenses.domain.template import LicenseTemplate
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.license_template_repository import LicenseTemplateRepository
from owners.application.services.owner_access_control import OwnerAccessControlService

logger = logging.getLogger(__name__)


class LicenseManagementFacade:
    """Facade over the license lifecycle, approvals and validation."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        template_repository: LicenseTemplateRepository,
        access_control: OwnerAccessControlService,
        approval_workflow: ApprovalWorkflowService,
        audit_service: AuditLogService,
        validation_service: LicenseValidationService,
        clock: Clock = None,
        event_bus: EventBus = None,
        governance: GovernanceSettings = None,
    ):
        """Initialize facade and the handlers it dispatches to."""
        governance = governance or GovernanceSettings()
        clock = clock or SystemClock()

        self.access_control = access_control
        self.approval_workflow = approval_workflow
        self.validation_service = validation_service

        outcome_applier = ApprovalOutcomeApplier(
            license_repository, audit_service, clock=clock, event_bus=event_bus
        )
        transition_args = (license_repository, access_control, audit_service)
        transition_kwargs = {"clock": clock, "event_bus": event_bus}

        self._create = CreateLicenseHandler(
            license_repository,
            template_repository,
            access_control,
            approval_workflow,
            outcome_applier,
            audit_service,
            clock=clock,
            event_bus=event_bus,
            default_validity_days=governance.default_validity_days,
        )
        self._submit_request = SubmitLicenseRequestHandler(approval_workflow)
        self._create_template = CreateLicenseTemplateHandler(
            template_repository, access_control, clock=clock
        )
        self._activate = ActivateLicenseHandler(*transition_args, **transition_kwargs)
        self._renew = RenewLicenseHandler(
            *transition_args,
            renewal_validity_days=governance.renewal_validity_days,
            **transition_kwargs,
        )
        self._suspend = SuspendLicenseHandler(*transition_args, **transition_kwargs)
        self._reactivate = ReactivateLicenseHandler(*transition_args, **transition_kwargs)
        self._revoke = RevokeLicenseHandler(*transition_args, **transition_kwargs)
        self._expire = ExpireStaleLicensesHandler(
            license_repository, audit_service, clock=clock, event_bus=event_bus
        )
        self._process_approval = ProcessApprovalHandler(
            access_control, approval_workflow, outcome_applier
        )
        self._auto_process = AutoProcessApprovalsHandler(approval_workflow, outcome_applier)
        self._report = GenerateLicenseReportHandler(
            license_repository,
            approval_workflow,
            audit_service,
            access_control,
            clock=clock,
            recent_activity_limit=governance.report_recent_activity_limit,
        )
        self._history = GetLicenseHistoryHandler(
            license_repository, audit_service, access_control
        )

    # Lifecycle

    async def create_license(
        self, request: CreateLicenseCommand, created_by: str
    ) -> CreateLicenseResultDTO:
        return await self._create.handle(request, created_by)

    async def activate_license(self, license_key: str, user_id: str) -> License:
        return await self._activate.handle(ActivateLicenseCommand(license_key, user_id))

    async def renew_license(self, license_id: uuid.UUID, renewed_by: str) -> License:
        return await self._renew.handle(RenewLicenseCommand(license_id, renewed_by))

    async def suspend_license(
        self, license_id: uuid.UUID, suspended_by: str, reason: Optional[str] = None
    ) -> License:
        return await self._suspend.handle(SuspendLicenseCommand(license_id, suspended_by, reason))

    async def reactivate_license(
        self, license_id: uuid.UUID, reactivated_by: str, reason: Optional[str] = None
    ) -> License:
        return await self._reactivate.handle(
            ReactivateLicenseCommand(license_id, reactivated_by, reason)
        )

    async def revoke_license(
        self, license_id: uuid.UUID, revoked_by: str, reason: Optional[str] = None
    ) -> License:
        return await self._revoke.handle(RevokeLicenseCommand(license_id, revoked_by, reason))

    async def expire_stale_licenses(self) -> int:
        return await self._expire.handle()

    # Approvals

    async def submit_license_request(
        self, request: LicenseRequestCommand, requested_by: str
    ) -> LicenseApproval:
        return await self._submit_request.handle(request, requested_by)

    async def process_approval(
        self,
        approval_id: uuid.UUID,
        decision: ApprovalDecision,
        processed_by: str,
        reason: Optional[str] = None,
    ) -> LicenseApproval:
        return await self._process_approval.handle(
            ProcessApprovalCommand(approval_id, decision, processed_by, reason)
        )

    async def get_approval_queue(self, owner_id: str) -> List[LicenseApproval]:
        await self.access_control.validate_owner_permission(
            owner_id, OwnerPermission.CAN_APPROVE_LICENSES
        )
        return await self.approval_workflow.get_approval_queue()

    async def auto_process_approvals(self) -> int:
        """Run the auto-approval sweep; returns how many were approved."""
        return await self._auto_process.handle()

    # Templates and reporting

    async def create_license_template(
        self, request: CreateLicenseTemplateCommand, created_by: str
    ) -> LicenseTemplate:
        return await self._create_template.handle(request, created_by)

    async def generate_license_report(self, owner_id: str) -> LicenseReportDTO:
        return await self._report.handle(GenerateLicenseReportQuery(owner_id))

    async def get_license_history(
        self, license_id: uuid.UUID, user_id: str
    ) -> List[AuditEntryDTO]:
        return await self._history.handle(GetLicenseHistoryQuery(license_id, user_id))

    # Validation

    async def validate_license_key(self, license_key: str) -> ValidationResult:
        return await self.validation_service.validate_license_key(license_key)

    async def validate_license_features(
        self, license_id: uuid.UUID, features: Iterable[str]
    ) -> bool:
        return await self.validation_service.validate_license_features(license_id, features)

    async def validate_license_limits(
        self, license_id: uuid.UUID, usage: UsageData
    ) -> ValidationResult:
        return await self.validation_service.validate_license_limits(license_id, usage)

    # Access control predicates

    async def can_user_access_license(self, user_id: str, license_owner_id: str) -> bool:
        return await self.access_control.can_user_access_license(user_id, license_owner_id)

    async def is_global_owner(self, user_id: str) -> bool:
        return await self.access_control.is_global_owner(user_id)

    async def check_owner_permission(self, user_id: str, permission: OwnerPermission) -> bool:
        return await self.access_control.check_owner_permission(user_id, permission)
