"""
Unit tests for License entity.
"""
import uuid
from datetime import timedelta

import pytest

from core.domain.exceptions import InvalidLicenseStatusError
from core.domain.value_objects import LicenseApprovalStatus, LicenseStatus, LicenseType
from fakes import EPOCH
from licenses.domain.license import License


def make_license(**overrides):
    values = {
        "license_key": "COMM-LZ1Y2X3W-ABCDEFGHIJ",
        "license_type": LicenseType.COMMUNITY,
        "issued_to": "user-1",
        "issued_by": "owner-1",
        "now": EPOCH,
        "validity_days": 30,
    }
    values.update(overrides)
    return License.create(**values)


class TestLicenseEntity:
    """Tests for License entity."""

    def test_create_license(self):
        """Test creating a license."""
        license = make_license(features={"api_access": True}, limits={"max_users": 5})

        assert license.id is not None
        assert license.status == LicenseStatus.PENDING
        assert license.approval_status == LicenseApprovalStatus.PENDING
        assert license.valid_from == EPOCH
        assert license.valid_until == EPOCH + timedelta(days=30)
        assert license.features == {"api_access": True}
        assert license.limits == {"max_users": 5}

    def test_create_license_with_id(self):
        """Test creating a license with an explicit id."""
        license_id = uuid.uuid4()
        assert make_license(license_id=license_id).id == license_id

    def test_create_requires_issued_to(self):
        """Test a license must be issued to someone."""
        with pytest.raises(ValueError, match="issued to"):
            make_license(issued_to="")

    def test_create_rejects_negative_validity(self):
        """Test negative validity is refused."""
        with pytest.raises(ValueError, match="negative"):
            make_license(validity_days=-1)

    def test_active_license_must_be_approved(self):
        """Test an unapproved license cannot be built active."""
        license = make_license()
        with pytest.raises(ValueError, match="approved"):
            License(**{**license.__dict__, "status": LicenseStatus.ACTIVE})

    def test_approve_license(self):
        """Test approving a license."""
        approved = make_license().approve("owner-1", EPOCH)

        assert approved.approval_status == LicenseApprovalStatus.APPROVED
        assert approved.approved_by == "owner-1"
        assert approved.approved_at == EPOCH
        assert approved.status == LicenseStatus.PENDING

    def test_approve_twice_keeps_first_approver(self):
        """Test approving again changes nothing."""
        approved = make_license().approve("owner-1", EPOCH)
        again = approved.approve("owner-2", EPOCH + timedelta(hours=1))

        assert again is approved

    def test_reject_license(self):
        """Test rejecting a license."""
        rejected = make_license().reject("Not justified", EPOCH)

        assert rejected.approval_status == LicenseApprovalStatus.REJECTED
        assert rejected.rejection_reason == "Not justified"

    def test_reject_active_license_fails(self):
        """Test an active license cannot be rejected."""
        active = make_license().approve("owner-1", EPOCH).activate(EPOCH)

        with pytest.raises(InvalidLicenseStatusError):
            active.reject("too late", EPOCH)

    def test_activate_license(self):
        """Test activating an approved license."""
        active = make_license().approve("owner-1", EPOCH).activate(EPOCH)

        assert active.status == LicenseStatus.ACTIVE

    def test_activate_unapproved_license_fails(self):
        """Test activation requires approval."""
        with pytest.raises(InvalidLicenseStatusError, match="not approved"):
            make_license().activate(EPOCH)

    def test_suspend_and_reactivate(self):
        """Test suspending and reactivating an active license."""
        active = make_license().approve("owner-1", EPOCH).activate(EPOCH)

        suspended = active.suspend(EPOCH)
        assert suspended.status == LicenseStatus.SUSPENDED

        reactivated = suspended.reactivate(EPOCH)
        assert reactivated.status == LicenseStatus.ACTIVE

    def test_suspend_pending_license_fails(self):
        """Test only active licenses can be suspended."""
        with pytest.raises(InvalidLicenseStatusError):
            make_license().suspend(EPOCH)

    def test_reactivate_active_license_fails(self):
        """Test only suspended licenses can be reactivated."""
        active = make_license().approve("owner-1", EPOCH).activate(EPOCH)
        with pytest.raises(InvalidLicenseStatusError):
            active.reactivate(EPOCH)

    def test_revoke_is_terminal(self):
        """Test a revoked license accepts no further transition."""
        revoked = make_license().revoke(EPOCH)

        assert revoked.status == LicenseStatus.REVOKED
        with pytest.raises(InvalidLicenseStatusError):
            revoked.revoke(EPOCH)
        with pytest.raises(InvalidLicenseStatusError):
            revoked.mark_expired(EPOCH)

    def test_renew_restarts_validity(self):
        """Test renewal restarts the window at the renewal time."""
        later = EPOCH + timedelta(days=20)
        active = make_license().approve("owner-1", EPOCH).activate(EPOCH)

        renewed = active.renew(later, 365)

        assert renewed.valid_from == later
        assert renewed.valid_until == later + timedelta(days=365)
        assert renewed.status == LicenseStatus.ACTIVE

    def test_renew_expired_license_fails(self):
        """Test expired licenses cannot be renewed."""
        expired = make_license().approve("owner-1", EPOCH).mark_expired(EPOCH)
        with pytest.raises(InvalidLicenseStatusError):
            expired.renew(EPOCH, 365)

    def test_renew_unapproved_license_fails(self):
        """Test renewal requires approval."""
        with pytest.raises(InvalidLicenseStatusError, match="not approved"):
            make_license().renew(EPOCH, 365)

    def test_is_within_validity(self):
        """Test the validity window is inclusive at both ends."""
        license = make_license(validity_days=10)

        assert license.is_within_validity(EPOCH)
        assert license.is_within_validity(EPOCH + timedelta(days=10))
        assert not license.is_within_validity(EPOCH - timedelta(seconds=1))
        assert not license.is_within_validity(EPOCH + timedelta(days=10, seconds=1))

    def test_snapshot_of_named_fields(self):
        """Test a snapshot carries the identity envelope and the named fields."""
        license = make_license()

        snapshot = license.snapshot("status")

        assert snapshot == {
            "id": str(license.id),
            "license_key": license.license_key,
            "status": "pending",
        }

    def test_full_snapshot_is_serializable(self):
        """Test the full snapshot holds plain values."""
        snapshot = make_license(features={"sso": True}).snapshot()

        assert snapshot["license_type"] == "community"
        assert snapshot["valid_until"] == (EPOCH + timedelta(days=30)).isoformat()
        assert snapshot["features"] == {"sso": True}
        assert "created_at" not in snapshot
