"""
Integration tests for the service container against the Django adapters.
"""

import pytest

from core.domain.exceptions import ForbiddenError, LicenseAccessDeniedError
from core.domain.value_objects import (
    ApprovalDecision,
    ApprovalStatus,
    LicenseStatus,
    LicenseType,
)
from core.infrastructure.container import build_container
from core.infrastructure.events import InMemoryEventBus
from licenses.application.commands.create_license import CreateLicenseCommand


@pytest.fixture
def container():
    """Fixture for a container publishing on an isolated bus."""
    return build_container(event_bus=InMemoryEventBus())


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
@pytest.mark.asyncio
class TestLicenseGovernanceFlow:
    """End-to-end license flows through the facade."""

    async def test_create_activate_and_validate(self, container, owner_user, member_user):
        """Test an owner-issued license is activated by its holder and validates."""
        facade = container.facade

        result = await facade.create_license(
            CreateLicenseCommand(
                license_type=LicenseType.ENTERPRISE,
                issued_to="alice",
                validity_days=30,
                features={"sso": True},
                limits={"max_users": 25},
                skip_approval=True,
            ),
            created_by="admin",
        )

        assert result.approval is None
        assert not result.requires_approval

        activated = await facade.activate_license(result.license.license_key, "alice")
        assert activated.status == LicenseStatus.ACTIVE

        validation = await facade.validate_license_key(activated.license_key)
        assert validation.is_valid
        assert await facade.validate_license_features(activated.id, ["sso"])

        history = await facade.get_license_history(activated.id, "admin")
        assert sorted(entry.action for entry in history) == ["activated", "approved", "created"]

    async def test_approval_request_emails_owners(
        self, container, owner_user, member_user, mailoutbox
    ):
        """Test a license awaiting approval notifies owners and can then be approved."""
        facade = container.facade

        result = await facade.create_license(
            CreateLicenseCommand(license_type=LicenseType.TRIAL, issued_to="alice"),
            created_by="admin",
        )

        assert result.requires_approval
        assert result.approval.status == ApprovalStatus.PENDING
        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == ["admin@example.com"]
        assert str(result.approval.id) in mailoutbox[0].body

        queue = await facade.get_approval_queue("admin")
        assert [approval.id for approval in queue] == [result.approval.id]

        decided = await facade.process_approval(
            result.approval.id, ApprovalDecision.APPROVE, "admin", "Looks fine"
        )
        assert decided.status == ApprovalStatus.APPROVED

        activated = await facade.activate_license(result.license.license_key, "alice")
        assert activated.is_approved

    async def test_member_cannot_create(self, container, member_user):
        """Test members are refused owner operations."""
        with pytest.raises(ForbiddenError):
            await container.facade.create_license(
                CreateLicenseCommand(license_type=LicenseType.TRIAL, issued_to="alice"),
                created_by="alice",
            )

    async def test_other_user_cannot_activate(self, container, owner_user, member_user):
        """Test only the holder or an owner may activate a license."""
        result = await container.facade.create_license(
            CreateLicenseCommand(
                license_type=LicenseType.COMMUNITY, issued_to="someone", skip_approval=True
            ),
            created_by="admin",
        )

        with pytest.raises(LicenseAccessDeniedError):
            await container.facade.activate_license(result.license.license_key, "alice")

    async def test_report(self, container, owner_user):
        """Test the report reflects the stored licenses."""
        await container.facade.create_license(
            CreateLicenseCommand(license_type=LicenseType.TRIAL, issued_to="bob"),
            created_by="admin",
        )

        report = await container.facade.generate_license_report("admin")

        assert report.total_licenses == 1
        assert report.pending_approvals == 1
