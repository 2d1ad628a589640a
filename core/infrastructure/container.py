"""
Wiring of application services to their Django adapters.
"""
from dataclasses import dataclass

from approvals.application.services.approval_workflow_service import ApprovalWorkflowService
from approvals.infrastructure.notifiers import EmailOwnerNotifier
from approvals.infrastructure.repositories.django_approval_repository import (
    DjangoApprovalRepository,
)
from audit.application.services.audit_log_service import AuditLogService
from audit.infrastructure.repositories.django_audit_log_repository import (
    DjangoAuditLogRepository,
)
from core.config import GovernanceSettings, get_governance_settings
from core.domain.clock import Clock, SystemClock
from core.domain.events import EventBus
from core.infrastructure.events import event_bus as default_event_bus
from licenses.application.facade import LicenseManagementFacade
from licenses.application.services.license_validation_service import (
    LicenseValidationService,
)
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)
from licenses.infrastructure.repositories.django_license_template_repository import (
    DjangoLicenseTemplateRepository,
)
from owners.application.services.owner_access_control import OwnerAccessControlService
from owners.infrastructure.repositories.django_owner_management_repository import (
    DjangoOwnerManagementRepository,
)
from owners.infrastructure.user_directory import DjangoUserDirectory


@dataclass
class ServiceContainer:
    """Services exposed to callers, the Celery tasks and management commands."""

    governance: GovernanceSettings
    access_control: OwnerAccessControlService
    approval_workflow: ApprovalWorkflowService
    audit_service: AuditLogService
    validation_service: LicenseValidationService
    facade: LicenseManagementFacade


def build_container(clock: Clock = None, event_bus: EventBus = None) -> ServiceContainer:
    """
    Build every service against the Django ORM adapters.

    Args:
        clock: Clock to use (system clock by default)
        event_bus: Event bus to publish on (global bus by default)

    Returns:
        ServiceContainer
    """
    governance = get_governance_settings()
    clock = clock or SystemClock()
    event_bus = event_bus or default_event_bus

    license_repository = DjangoLicenseRepository()
    owner_repository = DjangoOwnerManagementRepository()
    user_directory = DjangoUserDirectory(owner_role_slug=governance.owner_role_slug)

    access_control = OwnerAccessControlService(
        owner_repository,
        user_directory,
        clock=clock,
        owner_role_slug=governance.owner_role_slug,
    )
    approval_workflow = ApprovalWorkflowService(
        DjangoApprovalRepository(),
        owner_repository,
        EmailOwnerNotifier(
            owner_repository, user_directory, governance.notification_from_email
        ),
        clock=clock,
        event_bus=event_bus,
        expiry_days=governance.approval_expiry_days,
    )
    audit_service = AuditLogService(DjangoAuditLogRepository(), clock=clock)
    validation_service = LicenseValidationService(license_repository, clock=clock)

    facade = LicenseManagementFacade(
        license_repository,
        DjangoLicenseTemplateRepository(),
        access_control,
        approval_workflow,
        audit_service,
        validation_service,
        clock=clock,
        event_bus=event_bus,
        governance=governance,
    )

    return ServiceContainer(
        governance=governance,
        access_control=access_control,
        approval_workflow=approval_workflow,
        audit_service=audit_service,
        validation_service=validation_service,
        facade=facade,
    )
