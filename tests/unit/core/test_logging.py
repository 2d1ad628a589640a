"""
Unit tests for the structured logging configuration.
"""
import json
import logging

from LicenseGovernanceService.settings.logging import (
    APP_LOGGERS,
    SERVICE_NAME,
    CustomJsonFormatter,
    get_logging_config,
)


class TestLoggingConfig:
    """Tests for get_logging_config and CustomJsonFormatter."""

    def test_formatter_adds_service_and_level(self):
        """Test every record is tagged with the service name and level."""
        formatter = CustomJsonFormatter("%(message)s")
        record = logging.LogRecord(
            "licenses", logging.WARNING, __file__, 1, "License %s revoked", ("abc",), None
        )
        record.license_id = "abc"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "License abc revoked"
        assert payload["service"] == SERVICE_NAME
        assert payload["level"] == "WARNING"
        assert payload["license_id"] == "abc"

    def test_levels_by_environment(self):
        """Test application loggers are verbose in development only."""
        development = get_logging_config("development")
        production = get_logging_config("production")

        for name in APP_LOGGERS:
            assert development["loggers"][name]["level"] == "DEBUG"
            assert production["loggers"][name]["level"] == "INFO"
        assert production["handlers"]["console"]["formatter"] == "json"
