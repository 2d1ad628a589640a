"""
Unit tests for LicenseValidationService.
"""
import uuid

import pytest

from core.domain.value_objects import LicenseType
from fakes import EPOCH
from licenses.domain.license import License
from licenses.domain.services import UsageData


def build_license(approved=True, active=True, **overrides):
    values = {
        "license_key": f"ENT-LZ1Y2X3W-{uuid.uuid4().hex[:10].upper()}-AAAAAAAAAA",
        "license_type": LicenseType.ENTERPRISE,
        "issued_to": "user-1",
        "issued_by": "owner-1",
        "now": EPOCH,
        "validity_days": 30,
        "features": {"sso": True, "audit_logs": False},
        "limits": {"max_users": 10},
    }
    values.update(overrides)
    license = License.create(**values)
    if approved:
        license = license.approve("owner-1", EPOCH)
    if approved and active:
        license = license.activate(EPOCH)
    return license


@pytest.mark.asyncio
class TestLicenseValidationService:
    """Tests for LicenseValidationService."""

    async def test_validate_unknown_key(self, validation_service):
        """Test an unknown key yields a not found result."""
        result = await validation_service.validate_license_key("COMM-NOPE-NOPE")

        assert result.is_valid is False
        assert result.error == "License not found"

    async def test_validate_key(self, validation_service, license_repository):
        """Test validating a stored active license by key."""
        license = await license_repository.save(build_license())

        result = await validation_service.validate_license_key(license.license_key)

        assert result.is_valid is True

    async def test_validate_key_after_expiry(
        self, validation_service, license_repository, clock
    ):
        """Test a license stops validating once its window has passed."""
        license = await license_repository.save(build_license())
        clock.advance(days=31)

        result = await validation_service.validate_license_key(license.license_key)

        assert result.is_valid is False
        assert "expired" in result.error

    async def test_validate_license_status(self, validation_service, license_repository):
        """Test the boolean status check."""
        active = await license_repository.save(build_license())
        pending = await license_repository.save(build_license(active=False))

        assert await validation_service.validate_license_status(active.id) is True
        assert await validation_service.validate_license_status(pending.id) is False
        assert await validation_service.validate_license_status(uuid.uuid4()) is False

    async def test_validate_features(self, validation_service, license_repository):
        """Test every requested feature must be granted."""
        license = await license_repository.save(build_license())

        assert await validation_service.validate_license_features(license.id, ["sso"])
        assert not await validation_service.validate_license_features(
            license.id, ["sso", "audit_logs"]
        )
        assert await validation_service.validate_license_features(license.id, [])

    async def test_validate_features_of_invalid_license(
        self, validation_service, license_repository
    ):
        """Test features of a suspended license are not granted."""
        license = await license_repository.save(build_license().suspend(EPOCH))

        assert not await validation_service.validate_license_features(license.id, ["sso"])

    async def test_validate_limits(self, validation_service, license_repository):
        """Test usage is compared with the license limits."""
        license = await license_repository.save(build_license())

        within = await validation_service.validate_license_limits(
            license.id, UsageData(total_users=10)
        )
        over = await validation_service.validate_license_limits(
            license.id, UsageData(total_users=11)
        )

        assert within.is_valid
        assert not over.is_valid
        assert over.details["violations"] == ["Total users (11) exceeds limit (10)"]

    async def test_validate_limits_unknown_license(self, validation_service):
        """Test limits of an unknown license."""
        result = await validation_service.validate_license_limits(uuid.uuid4(), UsageData())

        assert result.error == "License not found"

    async def test_validate_limits_of_unapproved_license(
        self, validation_service, license_repository
    ):
        """Test the validity failure is returned before quota checks."""
        license = await license_repository.save(build_license(approved=False))

        result = await validation_service.validate_license_limits(
            license.id, UsageData(total_users=1)
        )

        assert result.error == "License is not approved"

    async def test_get_active_license_for_user(
        self, validation_service, license_repository
    ):
        """Test the user's currently valid license is found."""
        await license_repository.save(build_license(active=False))
        active = await license_repository.save(build_license())

        found = await validation_service.get_active_license_for_user("user-1")

        assert found.id == active.id
        assert await validation_service.get_active_license_for_user("user-9") is None

    async def test_get_license_usage_info(
        self, validation_service, license_repository, clock
    ):
        """Test the usage summary counts down and floors at zero."""
        license = await license_repository.save(build_license())
        clock.advance(days=10)

        info = await validation_service.get_license_usage_info(license.id)

        assert info["is_valid"] is True
        assert info["days_until_expiry"] == 20
        assert info["limits"] == {"max_users": 10}

        clock.advance(days=30)
        info = await validation_service.get_license_usage_info(license.id)
        assert info["days_until_expiry"] == 0
        assert info["is_valid"] is False

        assert await validation_service.get_license_usage_info(uuid.uuid4()) is None
