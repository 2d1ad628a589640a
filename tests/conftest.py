"""
Pytest configuration and shared fixtures.
"""

import pytest

from approvals.application.services.approval_workflow_service import ApprovalWorkflowService
from approvals.infrastructure.repositories.django_approval_repository import (
    DjangoApprovalRepository,
)
from audit.application.services.audit_log_service import AuditLogService
from audit.infrastructure.repositories.django_audit_log_repository import (
    DjangoAuditLogRepository,
)
from core.config import GovernanceSettings
from core.infrastructure.event_handlers import APPROVAL_EVENTS, LICENSE_EVENTS
from core.infrastructure.events import InMemoryEventBus
from fakes import (
    OTHER_USER,
    OWNER,
    OWNER_ROLE,
    SECOND_OWNER,
    USER,
    FakeUserDirectory,
    FixedClock,
    InMemoryApprovalRepository,
    InMemoryAuditLogRepository,
    InMemoryLicenseRepository,
    InMemoryLicenseTemplateRepository,
    InMemoryOwnerManagementRepository,
    RecordingEventHandler,
    RecordingNotifier,
)
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


@pytest.fixture
def clock():
    """Fixture for a clock pinned to a fixed instant."""
    return FixedClock()


@pytest.fixture
def bus():
    """Fixture for an isolated event bus."""
    return InMemoryEventBus()


@pytest.fixture
def recorded_events(bus):
    """Fixture recording every license and approval event published on the bus."""
    recorder = RecordingEventHandler()
    for event_type in LICENSE_EVENTS + APPROVAL_EVENTS:
        bus.subscribe(event_type, recorder)
    return recorder


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return InMemoryLicenseRepository()


@pytest.fixture
def template_repository():
    """Fixture for LicenseTemplateRepository."""
    return InMemoryLicenseTemplateRepository()


@pytest.fixture
def approval_repository():
    """Fixture for ApprovalRepository."""
    return InMemoryApprovalRepository()


@pytest.fixture
def audit_repository():
    """Fixture for AuditLogRepository."""
    return InMemoryAuditLogRepository()


@pytest.fixture
def owner_repository():
    """Fixture for OwnerManagementRepository."""
    return InMemoryOwnerManagementRepository()


@pytest.fixture
def user_directory():
    """Fixture for a user directory with two owners and two members."""
    directory = FakeUserDirectory()
    directory.add(OWNER, OWNER_ROLE, email="owner1@example.com")
    directory.add(SECOND_OWNER, OWNER_ROLE, email="owner2@example.com")
    directory.add(USER, "global:member", email="user1@example.com")
    directory.add(OTHER_USER, "global:member")
    return directory


@pytest.fixture
def notifier():
    """Fixture for an owner notifier that records deliveries."""
    return RecordingNotifier()


@pytest.fixture
def access_control(owner_repository, user_directory, clock):
    """Fixture for OwnerAccessControlService."""
    return OwnerAccessControlService(
        owner_repository, user_directory, clock=clock, owner_role_slug=OWNER_ROLE
    )


@pytest.fixture
def audit_service(audit_repository, clock):
    """Fixture for AuditLogService."""
    return AuditLogService(audit_repository, clock=clock)


@pytest.fixture
def approval_workflow(approval_repository, owner_repository, notifier, clock, bus):
    """Fixture for ApprovalWorkflowService."""
    return ApprovalWorkflowService(
        approval_repository,
        owner_repository,
        notifier,
        clock=clock,
        event_bus=bus,
        expiry_days=7,
    )


@pytest.fixture
def validation_service(license_repository, clock):
    """Fixture for LicenseValidationService."""
    return LicenseValidationService(license_repository, clock=clock)


@pytest.fixture
def governance():
    """Fixture for governance settings with library defaults."""
    return GovernanceSettings(owner_role_slug=OWNER_ROLE)


@pytest.fixture
def facade(
    license_repository,
    template_repository,
    access_control,
    approval_workflow,
    audit_service,
    validation_service,
    clock,
    bus,
    governance,
):
    """Fixture for LicenseManagementFacade wired to in-memory adapters."""
    return LicenseManagementFacade(
        license_repository,
        template_repository,
        access_control,
        approval_workflow,
        audit_service,
        validation_service,
        clock=clock,
        event_bus=bus,
        governance=governance,
    )


@pytest.fixture
def django_license_repository():
    """Fixture for the Django LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def django_template_repository():
    """Fixture for the Django LicenseTemplateRepository."""
    return DjangoLicenseTemplateRepository()


@pytest.fixture
def django_approval_repository():
    """Fixture for the Django ApprovalRepository."""
    return DjangoApprovalRepository()


@pytest.fixture
def django_audit_repository():
    """Fixture for the Django AuditLogRepository."""
    return DjangoAuditLogRepository()


@pytest.fixture
def django_owner_repository():
    """Fixture for the Django OwnerManagementRepository."""
    return DjangoOwnerManagementRepository()


@pytest.fixture
def owner_user(transactional_db, django_user_model):
    """Fixture for a superuser, who holds the owner role."""
    return django_user_model.objects.create_superuser(
        username="admin", email="admin@example.com", password="secret"
    )


@pytest.fixture
def member_user(transactional_db, django_user_model):
    """Fixture for a regular user without groups."""
    return django_user_model.objects.create_user(
        username="alice", email="alice@example.com", password="secret"
    )
