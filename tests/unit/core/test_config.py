"""
Unit tests for governance settings.
"""
from django.test import override_settings

from core.config import GovernanceSettings, get_governance_settings


class TestGovernanceSettings:
    """Tests for GovernanceSettings."""

    def test_defaults(self):
        """Test the defaults used when nothing is configured."""
        settings = GovernanceSettings()

        assert settings.owner_role_slug == "global:owner"
        assert settings.approval_expiry_days == 7
        assert settings.default_validity_days == 365

    def test_from_mapping(self):
        """Test upper-case keys are read and unknown keys ignored."""
        settings = GovernanceSettings.from_mapping(
            {"APPROVAL_EXPIRY_DAYS": 3, "OWNER_ROLE_SLUG": "acme:admin", "UNRELATED": 1}
        )

        assert settings.approval_expiry_days == 3
        assert settings.owner_role_slug == "acme:admin"
        assert settings.renewal_validity_days == 365

    def test_from_django_settings(self):
        """Test the Django setting is picked up."""
        with override_settings(LICENSE_GOVERNANCE={"AUDIT_RETENTION_DAYS": 30}):
            assert get_governance_settings().audit_retention_days == 30

    def test_missing_django_setting(self):
        """Test defaults apply when the setting is absent."""
        with override_settings(LICENSE_GOVERNANCE=None):
            assert get_governance_settings() == GovernanceSettings()
