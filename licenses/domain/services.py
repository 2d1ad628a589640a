"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from core.domain.value_objects import LicenseStatus, LicenseType
from licenses.domain.license import FeatureValue, License
from licenses.domain.license_key import (
    KeyFormatResult,
    generate_license_key,
    validate_key_format,
)

UNLIMITED = -1


@dataclass(frozen=True)
class ValidationResult:
    """Structured outcome of a validity, feature or quota check."""

    is_valid: bool
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UsageData:
    """Usage counters reported by a license consumer."""

    active_workflows: Optional[int] = None
    executions_this_month: Optional[int] = None
    total_users: Optional[int] = None
    data_size: Optional[int] = None
    requests_per_minute: Optional[int] = None

    def to_dict(self) -> Dict[str, int]:
        return {
            name: getattr(self, name)
            for name in self.__dataclass_fields__
            if getattr(self, name) is not None
        }


# (usage counter, limit key, label used in violation messages)
USAGE_LIMITS = (
    ("active_workflows", "max_workflows_per_user", "Active workflows"),
    ("executions_this_month", "max_executions_per_month", "Monthly executions"),
    ("total_users", "max_users", "Total users"),
    ("data_size", "max_execution_data_size", "Data size"),
    ("requests_per_minute", "rate_limit_per_minute", "Requests per minute"),
)


class LicenseKeyGenerator:
    """Domain service for license key generation."""

    @staticmethod
    def generate(
        license_type: LicenseType, custom_prefix: Optional[str] = None
    ) -> str:
        """
        Generate a license key.

        Args:
            license_type: License type the key is issued for
            custom_prefix: Prefix for custom license keys

        Returns:
            Generated license key string
        """
        return generate_license_key(license_type, custom_prefix)

    @staticmethod
    def validate_format(key: str) -> KeyFormatResult:
        """Structural key check, no lookup."""
        return validate_key_format(key)


class LicenseValidator:
    """Domain service for point-in-time license validation."""

    @staticmethod
    def validate_license(license: License, now: datetime) -> ValidationResult:
        """
        Validate a license at a given instant.

        Checks run in a fixed order and stop at the first failure:
        approval, status, start of validity, end of validity.

        Args:
            license: License entity to validate
            now: Instant to validate at

        Returns:
            ValidationResult
        """
        if not license.is_approved:
            return ValidationResult(
                is_valid=False,
                error="License is not approved",
                details={"approval_status": license.approval_status.value},
            )

        if license.status != LicenseStatus.ACTIVE:
            return ValidationResult(
                is_valid=False,
                error=f"License is {license.status.value}",
                details={"status": license.status.value},
            )

        if now < license.valid_from:
            return ValidationResult(
                is_valid=False,
                error="License is not yet valid",
                details={"valid_from": license.valid_from.isoformat()},
            )

        if now > license.valid_until:
            return ValidationResult(
                is_valid=False,
                error="License has expired",
                details={"valid_until": license.valid_until.isoformat()},
            )

        return ValidationResult(
            is_valid=True,
            details={
                "license_type": license.license_type.value,
                "valid_from": license.valid_from.isoformat(),
                "valid_until": license.valid_until.isoformat(),
                "features": dict(license.features),
                "limits": dict(license.limits),
            },
        )

    @staticmethod
    def has_feature(features: Mapping[str, FeatureValue], feature: str) -> bool:
        """
        Check whether a feature is granted.

        Booleans count when true, numbers when positive, anything
        else when present and not null.
        """
        value = features.get(feature)
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return value > 0
        return value is not None

    @staticmethod
    def check_limits(
        limits: Mapping[str, Any], usage: UsageData
    ) -> ValidationResult:
        """
        Compare usage counters against quota limits.

        A counter is only checked when both it and its limit are set;
        a limit of -1 is unlimited. All violations are collected.

        Returns:
            ValidationResult with ``details["violations"]`` on failure
        """
        violations = []
        for usage_name, limit_key, label in USAGE_LIMITS:
            used = getattr(usage, usage_name)
            limit = limits.get(limit_key)
            if used is None or limit is None or limit == UNLIMITED:
                continue
            if used > limit:
                violations.append(f"{label} ({used}) exceeds limit ({limit})")

        if violations:
            return ValidationResult(
                is_valid=False,
                error="License limits exceeded",
                details={"violations": violations},
            )

        return ValidationResult(
            is_valid=True,
            details={"limits": dict(limits), "usage": usage.to_dict()},
        )
