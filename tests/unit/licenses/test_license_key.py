"""
Unit tests for license key generation and format validation.
"""
import pytest

from core.domain.value_objects import LicenseType
from licenses.domain.license_key import generate_license_key, validate_key_format


class TestGenerateLicenseKey:
    """Tests for generate_license_key."""

    @pytest.mark.parametrize(
        "license_type,prefix,segments",
        [
            (LicenseType.COMMUNITY, "COMM", 3),
            (LicenseType.TRIAL, "TRIAL", 3),
            (LicenseType.ENTERPRISE, "ENT", 4),
            (LicenseType.CUSTOM, "CUST", 3),
        ],
    )
    def test_key_shape(self, license_type, prefix, segments):
        """Test keys carry the type prefix and segment count."""
        key = generate_license_key(license_type)
        parts = key.split("-")

        assert parts[0] == prefix
        assert len(parts) == segments
        assert key == key.upper()

    def test_custom_prefix(self):
        """Test custom licenses use the requested prefix."""
        key = generate_license_key(LicenseType.CUSTOM, "acme")
        assert key.startswith("ACME-")

    def test_invalid_custom_prefix(self):
        """Test malformed custom prefixes are refused."""
        with pytest.raises(ValueError, match="prefix"):
            generate_license_key(LicenseType.CUSTOM, "no-dash")

    def test_keys_are_unique(self):
        """Test generated keys do not repeat."""
        keys = {generate_license_key(LicenseType.TRIAL) for _ in range(200)}
        assert len(keys) == 200

    def test_generated_keys_validate(self):
        """Test a generated key passes the format check with its type."""
        key = generate_license_key(LicenseType.ENTERPRISE)
        result = validate_key_format(key)

        assert result.valid
        assert result.license_type == LicenseType.ENTERPRISE


class TestValidateKeyFormat:
    """Tests for validate_key_format."""

    def test_empty_key(self):
        """Test an empty key is invalid."""
        result = validate_key_format("")
        assert not result.valid
        assert "empty" in result.error

    def test_wrong_segment_count(self):
        """Test a community key needs exactly three segments."""
        result = validate_key_format("COMM-LZ1Y2X3W")
        assert not result.valid
        assert "segments" in result.error

    def test_enterprise_allows_extra_segments(self):
        """Test enterprise keys accept three or more segments."""
        assert validate_key_format("ENT-LZ1Y2X3W-AAAA").valid
        assert validate_key_format("ENT-LZ1Y2X3W-AAAA-BBBB-CCCC").valid

    def test_lowercase_rejected(self):
        """Test segments must be upper-case alphanumerics."""
        result = validate_key_format("COMM-lz1y2x3w-ABCDEFGHIJ")
        assert not result.valid
        assert "invalid characters" in result.error

    def test_unknown_prefix_is_custom(self):
        """Test an unrecognised prefix is read as a custom key."""
        result = validate_key_format("ACME-LZ1Y2X3W-ABCDEFGHIJ")
        assert result.valid
        assert result.license_type == LicenseType.CUSTOM
