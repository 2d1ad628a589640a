"""
License creation handlers.

Handles license creation, license requests and template creation.
"""
import logging
import uuid

from approvals.application.services.approval_workflow_service import ApprovalWorkflowService
from approvals.domain.approval import LicenseApproval
from audit.application.services.audit_log_service import AuditLogService
from core.domain.clock import Clock, SystemClock
from core.domain.events import EventBus
from core.domain.exceptions import InvalidStateError, TemplateNotFoundError
from core.domain.value_objects import (
    ApprovalPriority,
    ApprovalStatus,
    ApprovalType,
    AuditAction,
    OwnerPermission,
)
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import licenses_created_total
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.create_license_template import (
    CreateLicenseTemplateCommand,
)
from licenses.application.commands.submit_license_request import LicenseRequestCommand
from licenses.application.dto.license_dto import CreateLicenseResultDTO
from licenses.application.handlers.process_approval_handler import (
    APPROVAL_FIELDS,
    ApprovalOutcomeApplier,
)
from licenses.domain.events import LicenseApproved, LicenseCreated
from licenses.domain.license import License
from licenses.domain.services import LicenseKeyGenerator
from licenses.domain.template import LicenseTemplate
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.license_template_repository import LicenseTemplateRepository
from owners.application.services.owner_access_control import OwnerAccessControlService

logger = logging.getLogger(__name__)

SKIPPED_APPROVAL_REASON = "Auto-approved"


class CreateLicenseHandler:
    """Handler for CreateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        template_repository: LicenseTemplateRepository,
        access_control: OwnerAccessControlService,
        approval_workflow: ApprovalWorkflowService,
        outcome_applier: ApprovalOutcomeApplier,
        audit_service: AuditLogService,
        clock: Clock = None,
        event_bus: EventBus = None,
        default_validity_days: int = 365,
    ):
        """Initialize handler with repositories and services."""
        self.license_repository = license_repository
        self.template_repository = template_repository
        self.access_control = access_control
        self.approval_workflow = approval_workflow
        self.outcome_applier = outcome_applier
        self.audit_service = audit_service
        self.clock = clock or SystemClock()
        self.event_bus = event_bus or default_event_bus
        self.default_validity_days = default_validity_days

    async def handle(
        self, command: CreateLicenseCommand, created_by: str
    ) -> CreateLicenseResultDTO:
        """
        Handle create license command.

        The license is stored pending. It is approved straight away when
        approval is skipped, otherwise a medium priority creation approval
        is submitted.
        It is never activated here.

        Args:
            command: CreateLicenseCommand
            created_by: Owner creating the license

        Returns:
            CreateLicenseResultDTO with the license and any approval request

        Raises:
            InsufficientPermissionError: Without can_create_licenses
            TemplateNotFoundError: If a template id is given but unknown
        """
        logger.info(
            "Creating license",
            extra={
                "license_type": command.license_type.value,
                "issued_to": command.issued_to,
                "created_by": created_by,
            },
        )

        await self.access_control.validate_owner_permission(
            created_by, OwnerPermission.CAN_CREATE_LICENSES
        )

        template = None
        if command.template_id:
            template = await self.template_repository.find_by_id(command.template_id)
            if not template:
                raise TemplateNotFoundError(f"Template {command.template_id} not found")

        features = dict(template.default_features) if template else {}
        features.update(command.features)
        limits = dict(template.default_limits) if template else {}
        limits.update(command.limits)

        if command.validity_days is not None:
            validity_days = command.validity_days
        elif template:
            validity_days = template.default_validity_days
        else:
            validity_days = self.default_validity_days

        now = self.clock.now()
        license = License.create(
            license_key=LicenseKeyGenerator.generate(command.license_type, command.custom_prefix),
            license_type=command.license_type,
            issued_to=command.issued_to,
            issued_by=created_by,
            now=now,
            validity_days=validity_days,
            features=features,
            limits=limits,
            metadata=command.metadata,
            subscription_id=command.subscription_id,
            parent_license_id=command.parent_license_id,
        )
        saved = await self.license_repository.save(license)

        licenses_created_total.labels(license_type=saved.license_type.value).inc()
        await self.audit_service.record(
            license_id=saved.id,
            action=AuditAction.CREATED,
            performed_by=created_by,
            previous_state=None,
            new_state=saved.snapshot(),
            metadata={"template_id": str(template.id)} if template else None,
        )
        await self.event_bus.publish(
            LicenseCreated(
                license_id=saved.id,
                performed_by=created_by,
                license_type=saved.license_type.value,
                issued_to=saved.issued_to,
                occurred_at=saved.created_at,
            )
        )

        if command.skip_approval or (template and not template.requires_approval):
            approved = await self._approve_immediately(saved, created_by)
            logger.info("License %s created and approved", approved.id)
            return CreateLicenseResultDTO(license=approved)

        approval = await self.approval_workflow.submit_approval(
            license_id=saved.id,
            requested_by=created_by,
            approval_type=ApprovalType.CREATION,
            request_data=command.to_request_data(),
            priority=ApprovalPriority.MEDIUM,
        )
        if approval.status == ApprovalStatus.APPROVED:
            saved = await self.outcome_applier.apply(approval) or saved

        logger.info(
            "License %s created, approval %s is %s", saved.id, approval.id, approval.status.value
        )
        return CreateLicenseResultDTO(license=saved, approval=approval)

    async def _approve_immediately(self, license: License, approved_by: str) -> License:
        approved = await self.license_repository.save(
            license.approve(approved_by, self.clock.now())
        )
        await self.audit_service.record(
            license_id=approved.id,
            action=AuditAction.APPROVED,
            performed_by=approved_by,
            previous_state=license.snapshot(*APPROVAL_FIELDS),
            new_state=approved.snapshot(*APPROVAL_FIELDS),
            reason=SKIPPED_APPROVAL_REASON,
        )
        await self.event_bus.publish(
            LicenseApproved(
                license_id=approved.id,
                performed_by=approved_by,
                occurred_at=approved.updated_at,
            )
        )
        return approved


class SubmitLicenseRequestHandler:
    """Handler for LicenseRequestCommand."""

    def __init__(self, approval_workflow: ApprovalWorkflowService):
        self.approval_workflow = approval_workflow

    async def handle(self, command: LicenseRequestCommand, requested_by: str) -> LicenseApproval:
        """
        Submit a creation approval for a license that does not exist yet.

        Args:
            command: LicenseRequestCommand
            requested_by: Requesting user

        Returns:
            The submitted approval
        """
        logger.info("License requested by %s for %s", requested_by, command.issued_to)
        return await self.approval_workflow.submit_approval(
            license_id=uuid.uuid4(),
            requested_by=requested_by,
            approval_type=ApprovalType.CREATION,
            request_data=command.to_request_data(),
            priority=command.priority,
        )


class CreateLicenseTemplateHandler:
    """Handler for CreateLicenseTemplateCommand."""

    def __init__(
        self,
        template_repository: LicenseTemplateRepository,
        access_control: OwnerAccessControlService,
        clock: Clock = None,
    ):
        self.template_repository = template_repository
        self.access_control = access_control
        self.clock = clock or SystemClock()

    async def handle(
        self, command: CreateLicenseTemplateCommand, created_by: str
    ) -> LicenseTemplate:
        """
        Handle create template command.

        Raises:
            InsufficientPermissionError: Without can_manage_templates
            InvalidStateError: If a template with the same name exists
        """
        logger.info("Creating license template %s by %s", command.name, created_by)

        await self.access_control.validate_owner_permission(
            created_by, OwnerPermission.CAN_MANAGE_TEMPLATES
        )

        if await self.template_repository.find_by_name(command.name):
            raise InvalidStateError(
                f"Template {command.name} already exists", code="TEMPLATE_EXISTS"
            )

        template = LicenseTemplate.create(
            name=command.name,
            license_type=command.license_type,
            created_by=created_by,
            now=self.clock.now(),
            description=command.description,
            default_features=command.default_features,
            default_limits=command.default_limits,
            default_validity_days=command.default_validity_days,
            requires_approval=command.requires_approval,
        )
        return await self.template_repository.save(template)
