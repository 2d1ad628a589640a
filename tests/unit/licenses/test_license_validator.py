"""
Unit tests for License domain services.
"""
from datetime import timedelta

from core.domain.value_objects import LicenseType
from fakes import EPOCH
from licenses.domain.license import License
from licenses.domain.services import LicenseValidator, UsageData


def active_license(**overrides):
    values = {
        "license_key": "TRIAL-LZ1Y2X3W-ABCDEFGHIJ",
        "license_type": LicenseType.TRIAL,
        "issued_to": "user-1",
        "issued_by": "owner-1",
        "now": EPOCH,
        "validity_days": 30,
    }
    values.update(overrides)
    return License.create(**values).approve("owner-1", EPOCH).activate(EPOCH)


class TestLicenseValidator:
    """Tests for LicenseValidator service."""

    def test_validate_valid_license(self):
        """Test validating a valid license."""
        result = LicenseValidator.validate_license(active_license(), EPOCH)

        assert result.is_valid is True
        assert result.error is None
        assert result.details["license_type"] == "trial"

    def test_validate_unapproved_license(self):
        """Test approval is checked first."""
        license = License.create(
            license_key="TRIAL-LZ1Y2X3W-ABCDEFGHIJ",
            license_type=LicenseType.TRIAL,
            issued_to="user-1",
            issued_by="owner-1",
            now=EPOCH,
            validity_days=30,
        )

        result = LicenseValidator.validate_license(license, EPOCH)

        assert result.is_valid is False
        assert result.error == "License is not approved"

    def test_validate_suspended_license(self):
        """Test validating a suspended license."""
        result = LicenseValidator.validate_license(active_license().suspend(EPOCH), EPOCH)

        assert result.is_valid is False
        assert result.error == "License is suspended"

    def test_validate_expired_license(self):
        """Test validating past the end of validity."""
        result = LicenseValidator.validate_license(
            active_license(), EPOCH + timedelta(days=31)
        )

        assert result.is_valid is False
        assert "expired" in result.error.lower()

    def test_validate_not_yet_valid(self):
        """Test validating before the start of validity."""
        result = LicenseValidator.validate_license(
            active_license(), EPOCH - timedelta(minutes=1)
        )

        assert result.is_valid is False
        assert result.error == "License is not yet valid"

    def test_status_is_reported_before_expiry(self):
        """Test a suspended license past its validity reports the status error."""
        license = active_license().suspend(EPOCH)

        result = LicenseValidator.validate_license(license, EPOCH + timedelta(days=31))

        assert result.is_valid is False
        assert result.error == "License is suspended"
        assert result.details == {"status": "suspended"}

    def test_status_is_reported_before_start(self):
        """Test a suspended license not yet valid reports the status error."""
        license = active_license().suspend(EPOCH)

        result = LicenseValidator.validate_license(license, EPOCH - timedelta(minutes=1))

        assert result.is_valid is False
        assert result.error == "License is suspended"

    def test_has_feature(self):
        """Test feature values are interpreted by type."""
        features = {
            "sso": True,
            "audit": False,
            "seats": 3,
            "quota": 0,
            "tier": "gold",
            "nothing": None,
        }

        assert LicenseValidator.has_feature(features, "sso")
        assert not LicenseValidator.has_feature(features, "audit")
        assert LicenseValidator.has_feature(features, "seats")
        assert not LicenseValidator.has_feature(features, "quota")
        assert LicenseValidator.has_feature(features, "tier")
        assert not LicenseValidator.has_feature(features, "nothing")
        assert not LicenseValidator.has_feature(features, "missing")

    def test_check_limits_within_quota(self):
        """Test usage at or under every limit passes."""
        result = LicenseValidator.check_limits(
            {"max_users": 10, "max_workflows_per_user": 5},
            UsageData(total_users=10, active_workflows=2),
        )

        assert result.is_valid
        assert result.details["usage"] == {"total_users": 10, "active_workflows": 2}

    def test_check_limits_collects_all_violations(self):
        """Test every exceeded limit is reported."""
        result = LicenseValidator.check_limits(
            {"max_users": 10, "rate_limit_per_minute": 60},
            UsageData(total_users=11, requests_per_minute=100),
        )

        assert not result.is_valid
        assert result.error == "License limits exceeded"
        assert result.details["violations"] == [
            "Total users (11) exceeds limit (10)",
            "Requests per minute (100) exceeds limit (60)",
        ]

    def test_check_limits_unlimited_and_unset(self):
        """Test -1 limits and missing counters impose nothing."""
        result = LicenseValidator.check_limits(
            {"max_users": -1, "max_execution_data_size": 100},
            UsageData(total_users=1_000_000),
        )

        assert result.is_valid
