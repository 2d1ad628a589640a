"""
License lifecycle handlers.

Handlers for activate, renew, suspend, reactivate and revoke commands,
and for the expiration sweep. Permission checks always come before any
write.
"""
import logging
import uuid

from audit.application.services.audit_log_service import AuditLogService
from core.domain.clock import Clock, SystemClock
from core.domain.events import EventBus
from core.domain.exceptions import (
    InvalidLicenseKeyError,
    InvalidLicenseStatusError,
    LicenseNotFoundError,
)
from core.domain.value_objects import AuditAction, LicenseStatus, OwnerPermission
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import license_transitions_total
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.commands.reactivate_license import ReactivateLicenseCommand
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.commands.suspend_license import SuspendLicenseCommand
from licenses.domain.events import (
    LicenseActivated,
    LicenseExpired,
    LicenseReactivated,
    LicenseRenewed,
    LicenseRevoked,
    LicenseSuspended,
)
from licenses.domain.license import License
from licenses.domain.services import LicenseKeyGenerator
from licenses.ports.license_repository import LicenseRepository
from owners.application.services.owner_access_control import OwnerAccessControlService

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "system"


class LicenseTransitionHandler:
    """Shared collaborators of the lifecycle handlers."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        access_control: OwnerAccessControlService,
        audit_service: AuditLogService,
        clock: Clock = None,
        event_bus: EventBus = None,
    ):
        """Initialize handler with repositories and services."""
        self.license_repository = license_repository
        self.access_control = access_control
        self.audit_service = audit_service
        self.clock = clock or SystemClock()
        self.event_bus = event_bus or default_event_bus

    async def _get_license(self, license_id: uuid.UUID) -> License:
        license = await self.license_repository.find_by_id(license_id)
        if not license:
            raise LicenseNotFoundError(f"License {license_id} not found")
        return license

    async def _record(
        self,
        action: AuditAction,
        before: License,
        after: License,
        performed_by: str,
        fields: tuple,
        reason: str = None,
    ) -> None:
        license_transitions_total.labels(action=action.value).inc()
        await self.audit_service.record(
            license_id=after.id,
            action=action,
            performed_by=performed_by,
            previous_state=before.snapshot(*fields),
            new_state=after.snapshot(*fields),
            reason=reason,
        )


class ActivateLicenseHandler(LicenseTransitionHandler):
    """Handler for ActivateLicenseCommand."""

    async def handle(self, command: ActivateLicenseCommand) -> License:
        """
        Handle activate license command.

        Activating an already active license changes nothing.

        Args:
            command: ActivateLicenseCommand

        Returns:
            Active License entity

        Raises:
            LicenseNotFoundError: If the key is unknown
            InvalidLicenseKeyError: If the key is malformed
            LicenseAccessDeniedError: If the user may not access the license
            InvalidLicenseStatusError: If the license cannot be activated
        """
        logger.info("Activating license for user %s", command.user_id)

        license = await self.license_repository.find_by_key(command.license_key)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_key} not found")

        key_format = LicenseKeyGenerator.validate_format(command.license_key)
        if not key_format.valid:
            raise InvalidLicenseKeyError(key_format.error or "Invalid license key")

        await self.access_control.validate_license_access(command.user_id, license.issued_to)

        if license.status == LicenseStatus.ACTIVE:
            return license
        if license.status.is_terminal or license.status == LicenseStatus.SUSPENDED:
            raise InvalidLicenseStatusError(
                f"Cannot activate a license that is {license.status.value}"
            )
        if not license.is_approved:
            raise InvalidLicenseStatusError("License is not approved")

        now = self.clock.now()
        if not license.is_within_validity(now):
            raise InvalidLicenseStatusError("License is outside its validity period")

        activated = await self.license_repository.save(license.activate(now))

        await self._record(
            AuditAction.ACTIVATED, license, activated, command.user_id, ("status",)
        )
        await self.event_bus.publish(
            LicenseActivated(
                license_id=activated.id,
                performed_by=command.user_id,
                occurred_at=activated.updated_at,
            )
        )

        logger.info("License %s activated by %s", activated.id, command.user_id)
        return activated


class RenewLicenseHandler(LicenseTransitionHandler):
    """Handler for RenewLicenseCommand."""

    def __init__(self, *args, renewal_validity_days: int = 365, **kwargs):
        super().__init__(*args, **kwargs)
        self.renewal_validity_days = renewal_validity_days

    async def handle(self, command: RenewLicenseCommand) -> License:
        """
        Handle renew license command.

        Args:
            command: RenewLicenseCommand

        Returns:
            Renewed License entity

        Raises:
            InsufficientPermissionError: Without can_create_licenses
            LicenseNotFoundError: If license not found
            InvalidLicenseStatusError: If the license is terminal or not approved
        """
        logger.info("Renewing license %s by %s", command.license_id, command.renewed_by)

        await self.access_control.validate_owner_permission(
            command.renewed_by, OwnerPermission.CAN_CREATE_LICENSES
        )
        license = await self._get_license(command.license_id)

        renewed = await self.license_repository.save(
            license.renew(self.clock.now(), self.renewal_validity_days)
        )

        await self._record(
            AuditAction.RENEWED,
            license,
            renewed,
            command.renewed_by,
            ("status", "valid_from", "valid_until"),
        )
        await self.event_bus.publish(
            LicenseRenewed(
                license_id=renewed.id,
                performed_by=command.renewed_by,
                new_expiration=renewed.valid_until,
                occurred_at=renewed.updated_at,
            )
        )

        logger.info("License %s renewed until %s", renewed.id, renewed.valid_until.isoformat())
        return renewed


class SuspendLicenseHandler(LicenseTransitionHandler):
    """Handler for SuspendLicenseCommand."""

    async def handle(self, command: SuspendLicenseCommand) -> License:
        """
        Handle suspend license command.

        Raises:
            InsufficientPermissionError: Without can_revoke_licenses
            LicenseNotFoundError: If license not found
            InvalidLicenseStatusError: If the license is not active
        """
        logger.info("Suspending license %s by %s", command.license_id, command.suspended_by)

        await self.access_control.validate_owner_permission(
            command.suspended_by, OwnerPermission.CAN_REVOKE_LICENSES
        )
        license = await self._get_license(command.license_id)

        suspended = await self.license_repository.save(license.suspend(self.clock.now()))

        await self._record(
            AuditAction.SUSPENDED,
            license,
            suspended,
            command.suspended_by,
            ("status",),
            reason=command.reason,
        )
        await self.event_bus.publish(
            LicenseSuspended(
                license_id=suspended.id,
                performed_by=command.suspended_by,
                reason=command.reason,
                occurred_at=suspended.updated_at,
            )
        )

        logger.info("License %s suspended", suspended.id)
        return suspended


class ReactivateLicenseHandler(LicenseTransitionHandler):
    """Handler for ReactivateLicenseCommand."""

    async def handle(self, command: ReactivateLicenseCommand) -> License:
        logger.info(
            "Reactivating license %s by %s", command.license_id, command.reactivated_by
        )

        await self.access_control.validate_owner_permission(
            command.reactivated_by, OwnerPermission.CAN_REVOKE_LICENSES
        )
        license = await self._get_license(command.license_id)

        reactivated = await self.license_repository.save(license.reactivate(self.clock.now()))

        await self._record(
            AuditAction.REACTIVATED,
            license,
            reactivated,
            command.reactivated_by,
            ("status",),
            reason=command.reason,
        )
        await self.event_bus.publish(
            LicenseReactivated(
                license_id=reactivated.id,
                performed_by=command.reactivated_by,
                occurred_at=reactivated.updated_at,
            )
        )

        logger.info("License %s reactivated", reactivated.id)
        return reactivated


class RevokeLicenseHandler(LicenseTransitionHandler):
    """Handler for RevokeLicenseCommand."""

    async def handle(self, command: RevokeLicenseCommand) -> License:
        """
        Handle revoke license command.

        Raises:
            InsufficientPermissionError: Without can_revoke_licenses
            LicenseNotFoundError: If license not found
            InvalidLicenseStatusError: If the license is already revoked or expired
        """
        logger.info("Revoking license %s by %s", command.license_id, command.revoked_by)

        await self.access_control.validate_owner_permission(
            command.revoked_by, OwnerPermission.CAN_REVOKE_LICENSES
        )
        license = await self._get_license(command.license_id)

        revoked = await self.license_repository.save(license.revoke(self.clock.now()))

        await self._record(
            AuditAction.REVOKED,
            license,
            revoked,
            command.revoked_by,
            ("status",),
            reason=command.reason,
        )
        await self.event_bus.publish(
            LicenseRevoked(
                license_id=revoked.id,
                performed_by=command.revoked_by,
                reason=command.reason,
                occurred_at=revoked.updated_at,
            )
        )

        logger.info("License %s revoked", revoked.id)
        return revoked


class ExpireStaleLicensesHandler:
    """Marks licenses whose validity window has elapsed as expired."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        audit_service: AuditLogService,
        clock: Clock = None,
        event_bus: EventBus = None,
    ):
        self.license_repository = license_repository
        self.audit_service = audit_service
        self.clock = clock or SystemClock()
        self.event_bus = event_bus or default_event_bus

    async def handle(self) -> int:
        """
        Expire every pending or active license past ``valid_until``.

        Returns:
            Number of licenses expired
        """
        now = self.clock.now()
        stale = await self.license_repository.find_expired(now)

        for license in stale:
            expired = license.mark_expired(now)
            await self.license_repository.update_status(license.id, LicenseStatus.EXPIRED, now)

            license_transitions_total.labels(action=AuditAction.EXPIRED.value).inc()
            await self.audit_service.record(
                license_id=license.id,
                action=AuditAction.EXPIRED,
                performed_by=SYSTEM_ACTOR,
                previous_state=license.snapshot("status", "valid_until"),
                new_state=expired.snapshot("status", "valid_until"),
                reason="Validity period elapsed",
            )
            await self.event_bus.publish(
                LicenseExpired(
                    license_id=license.id,
                    performed_by=SYSTEM_ACTOR,
                    occurred_at=now,
                )
            )

        if stale:
            logger.info("Expired %d license(s)", len(stale))
        return len(stale)
