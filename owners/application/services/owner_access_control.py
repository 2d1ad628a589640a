"""
Owner access control service.

Authorizes privileged license operations. A single elevated role, the
global owner, holds per-action permission flags and may delegate
license access to other users.
"""
import logging
from typing import Any, Dict, List, Optional

from core.config import DEFAULT_OWNER_ROLE_SLUG
from core.domain.clock import Clock, SystemClock
from core.domain.exceptions import (
    ForbiddenError,
    InsufficientPermissionError,
    LicenseAccessDeniedError,
    UserNotFoundError,
)
from core.domain.value_objects import ApprovalPriority, LicenseType, OwnerPermission
from core.metrics import permission_denials_total
from owners.domain.owner_management import OwnerManagement, OwnerPrincipal
from owners.ports.owner_management_repository import OwnerManagementRepository
from owners.ports.user_directory import UserDirectory

logger = logging.getLogger(__name__)


class OwnerAccessControlService:
    """Permission checks and access predicates for license operations."""

    def __init__(
        self,
        owner_repository: OwnerManagementRepository,
        user_directory: UserDirectory,
        clock: Clock = None,
        owner_role_slug: str = DEFAULT_OWNER_ROLE_SLUG,
    ):
        """Initialize service with repositories."""
        self.owner_repository = owner_repository
        self.user_directory = user_directory
        self.clock = clock or SystemClock()
        self.owner_role_slug = owner_role_slug

    async def validate_owner_permission(
        self, user_id: str, permission: OwnerPermission
    ) -> OwnerPrincipal:
        """
        Require that a user is a global owner holding a permission.

        The owner's management record is bootstrapped with permissive
        defaults the first time it is needed.

        Args:
            user_id: Acting user
            permission: Permission flag required

        Returns:
            OwnerPrincipal for the verified owner

        Raises:
            UserNotFoundError: If the user does not exist
            ForbiddenError: If the user is not a global owner
            InsufficientPermissionError: If the flag is not granted
        """
        logger.debug("Validating owner permission %s for %s", permission.value, user_id)

        user = await self.user_directory.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User {user_id} not found")

        if user.role_slug != self.owner_role_slug:
            permission_denials_total.labels(permission=permission.value).inc()
            raise ForbiddenError("Only global owners can perform this operation")

        owner = await self.owner_repository.get_or_create_default(user_id, self.clock.now())
        if not owner.has_permission(permission):
            permission_denials_total.labels(permission=permission.value).inc()
            logger.warning("Owner %s denied %s", user_id, permission.value)
            raise InsufficientPermissionError(
                f"Insufficient permissions: {permission.value} not allowed"
            )

        return OwnerPrincipal(
            user_id=user.id,
            role_slug=user.role_slug,
            permissions=dict(owner.permissions),
        )

    async def check_owner_permission(self, user_id: str, permission: OwnerPermission) -> bool:
        """Boolean form of validate_owner_permission."""
        try:
            await self.validate_owner_permission(user_id, permission)
        except (UserNotFoundError, ForbiddenError):
            return False
        return True

    async def is_global_owner(self, user_id: str) -> bool:
        user = await self.user_directory.find_by_id(user_id)
        return user is not None and user.role_slug == self.owner_role_slug

    async def is_delegated_user(self, owner_id: str, user_id: str) -> bool:
        """Check whether an owner has delegated to a user."""
        owner = await self.owner_repository.find_by_owner_id(owner_id)
        return owner is not None and owner.is_delegated(user_id)

    async def get_owner_permissions(self, user_id: str) -> Optional[Dict[str, bool]]:
        owner = await self.owner_repository.find_by_owner_id(user_id)
        return dict(owner.permissions) if owner else None

    async def get_all_owners(self) -> List[str]:
        owners = await self.owner_repository.find_all()
        return [owner.owner_id for owner in owners]

    async def can_user_access_license(self, user_id: str, license_owner_id: str) -> bool:
        """
        Check whether a user may access a license.

        Access is granted to the license holder, to any global owner,
        and to users the license holder has delegated to.
        """
        if user_id == license_owner_id:
            return True
        if await self.is_global_owner(user_id):
            return True
        return await self.is_delegated_user(license_owner_id, user_id)

    async def validate_license_access(self, user_id: str, license_owner_id: str) -> None:
        """
        Raises:
            LicenseAccessDeniedError: If the user may not access the license
        """
        if not await self.can_user_access_license(user_id, license_owner_id):
            raise LicenseAccessDeniedError()

    async def delegate_user(self, owner_id: str, user_id: str) -> OwnerManagement:
        """
        Delegate an owner's license access to another user.

        Raises:
            InsufficientPermissionError: Without can_delegate_permissions
        """
        await self.validate_owner_permission(owner_id, OwnerPermission.CAN_DELEGATE_PERMISSIONS)
        if user_id == owner_id:
            raise ValueError("An owner cannot delegate to themselves")
        if not await self.user_directory.find_by_id(user_id):
            raise UserNotFoundError(f"User {user_id} not found")

        owner = await self.owner_repository.get_or_create_default(owner_id, self.clock.now())
        updated = await self.owner_repository.save(owner.with_delegate(user_id, self.clock.now()))
        logger.info("Owner %s delegated access to %s", owner_id, user_id)
        return updated

    async def revoke_delegation(self, owner_id: str, user_id: str) -> OwnerManagement:
        """Remove a user from an owner's delegates."""
        await self.validate_owner_permission(owner_id, OwnerPermission.CAN_DELEGATE_PERMISSIONS)
        owner = await self.owner_repository.get_or_create_default(owner_id, self.clock.now())
        updated = await self.owner_repository.save(
            owner.without_delegate(user_id, self.clock.now())
        )
        logger.info("Owner %s revoked delegation of %s", owner_id, user_id)
        return updated

    async def configure_auto_approval(
        self, owner_id: str, enabled: bool, criteria: Optional[Dict[str, Any]] = None
    ) -> OwnerManagement:
        """
        Enable or disable auto-approval for an owner.

        Args:
            owner_id: Owner configuring their settings
            enabled: Whether auto-approval is on
            criteria: ``max_validity_days``, ``allowed_license_types``
                and/or ``max_priority``

        Raises:
            InsufficientPermissionError: Without can_approve_licenses
            ValueError: If the criteria are malformed
        """
        await self.validate_owner_permission(owner_id, OwnerPermission.CAN_APPROVE_LICENSES)
        criteria = dict(criteria or {})
        _check_criteria(criteria)

        owner = await self.owner_repository.get_or_create_default(owner_id, self.clock.now())
        updated = await self.owner_repository.save(
            owner.with_auto_approval(enabled, criteria, self.clock.now())
        )
        logger.info(
            "Owner %s %s auto-approval",
            owner_id,
            "enabled" if enabled else "disabled",
            extra={"criteria": criteria},
        )
        return updated


def _check_criteria(criteria: Dict[str, Any]) -> None:
    if "max_validity_days" in criteria:
        if int(criteria["max_validity_days"]) < 1:
            raise ValueError("max_validity_days must be at least 1")
    if "allowed_license_types" in criteria:
        for value in criteria["allowed_license_types"]:
            LicenseType(value)
    if "max_priority" in criteria:
        ApprovalPriority(criteria["max_priority"])
