"""
License validation service.

Answers whether a license currently grants a capability or is within
quota. Every check returns a result; nothing here raises for an
invalid license.
"""
import logging
from typing import Any, Dict, Iterable, Optional
import uuid

from core.domain.clock import Clock, SystemClock
from core.metrics import license_validations_total
from licenses.domain.license import License
from licenses.domain.services import LicenseValidator, UsageData, ValidationResult
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

LICENSE_NOT_FOUND = "License not found"


class LicenseValidationService:
    """Point-in-time validity, feature and quota checks."""

    def __init__(self, license_repository: LicenseRepository, clock: Clock = None):
        """Initialize service with repository and clock."""
        self.license_repository = license_repository
        self.clock = clock or SystemClock()

    async def validate_license_key(self, license_key: str) -> ValidationResult:
        """
        Validate a license by its key.

        Args:
            license_key: License key string

        Returns:
            ValidationResult; unknown keys yield "License not found"
        """
        license = await self.license_repository.find_by_key(license_key)
        if not license:
            _count("key", False)
            return ValidationResult(is_valid=False, error=LICENSE_NOT_FOUND)

        result = self.validate_license(license)
        _count("key", result.is_valid)
        return result

    def validate_license(self, license: License) -> ValidationResult:
        """Validate a license entity at the current time."""
        return LicenseValidator.validate_license(license, self.clock.now())

    async def validate_license_status(self, license_id: uuid.UUID) -> bool:
        license = await self.license_repository.find_by_id(license_id)
        if not license:
            return False
        return self.validate_license(license).is_valid

    async def validate_license_features(
        self, license_id: uuid.UUID, features: Iterable[str]
    ) -> bool:
        """
        Check that a valid license grants every requested feature.

        Args:
            license_id: License UUID
            features: Feature names required

        Returns:
            True only if the license is valid and grants all features
        """
        license = await self.license_repository.find_by_id(license_id)
        if not license or not self.validate_license(license).is_valid:
            _count("features", False)
            return False

        missing = [
            feature
            for feature in features
            if not LicenseValidator.has_feature(license.features, feature)
        ]
        if missing:
            logger.debug("License %s lacks features %s", license_id, missing)

        _count("features", not missing)
        return not missing

    async def validate_license_limits(
        self, license_id: uuid.UUID, usage: UsageData
    ) -> ValidationResult:
        """
        Check usage counters against the quota limits of a valid license.

        Args:
            license_id: License UUID
            usage: Usage counters to check

        Returns:
            ValidationResult listing every violation on failure
        """
        license = await self.license_repository.find_by_id(license_id)
        if not license:
            _count("limits", False)
            return ValidationResult(is_valid=False, error=LICENSE_NOT_FOUND)

        base = self.validate_license(license)
        if not base.is_valid:
            _count("limits", False)
            return base

        result = LicenseValidator.check_limits(license.limits, usage)
        if not result.is_valid:
            logger.info(
                "License %s exceeds limits",
                license_id,
                extra={"violations": result.details.get("violations")},
            )
        _count("limits", result.is_valid)
        return result

    async def get_active_license_for_user(self, user_id: str) -> Optional[License]:
        """Return the first of a user's licenses that is currently valid."""
        for license in await self.license_repository.find_by_user(user_id):
            if self.validate_license(license).is_valid:
                return license
        return None

    async def get_license_usage_info(self, license_id: uuid.UUID) -> Optional[Dict[str, Any]]:
        """
        Summarize a license for display.

        Returns:
            Dictionary with validity, dates, days until expiry, features
            and limits, or None if the license does not exist
        """
        license = await self.license_repository.find_by_id(license_id)
        if not license:
            return None

        now = self.clock.now()
        result = LicenseValidator.validate_license(license, now)
        days_until_expiry = max((license.valid_until - now).days, 0)

        return {
            "license_id": str(license.id),
            "license_key": license.license_key,
            "license_type": license.license_type.value,
            "status": license.status.value,
            "is_valid": result.is_valid,
            "error": result.error,
            "valid_from": license.valid_from.isoformat(),
            "valid_until": license.valid_until.isoformat(),
            "days_until_expiry": days_until_expiry,
            "features": dict(license.features),
            "limits": dict(license.limits),
        }


def _count(check: str, valid: bool) -> None:
    license_validations_total.labels(check=check, outcome="valid" if valid else "invalid").inc()
