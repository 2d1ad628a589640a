"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from core.domain.value_objects import (
    LicenseApprovalStatus,
    LicenseStatus,
    LicenseType,
)
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            license_key=model.license_key,
            license_type=LicenseType(model.license_type),
            status=LicenseStatus(model.status),
            issued_to=model.issued_to,
            issued_by=model.issued_by,
            valid_from=model.valid_from,
            valid_until=model.valid_until,
            approval_status=LicenseApprovalStatus(model.approval_status),
            created_at=model.created_at,
            updated_at=model.updated_at,
            features=dict(model.features or {}),
            limits=dict(model.limits or {}),
            metadata=dict(model.metadata or {}),
            approved_by=model.approved_by,
            approved_at=model.approved_at,
            rejection_reason=model.rejection_reason,
            subscription_id=model.subscription_id,
            parent_license_id=model.parent_license_id,
        )

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to Django model.

        Args:
            license: License domain entity

        Returns:
            Django License model
        """
        values = {
            "license_key": license.license_key,
            "license_type": license.license_type.value,
            "status": license.status.value,
            "issued_to": license.issued_to,
            "issued_by": license.issued_by,
            "valid_from": license.valid_from,
            "valid_until": license.valid_until,
            "features": dict(license.features),
            "limits": dict(license.limits),
            "approval_status": license.approval_status.value,
            "approved_by": license.approved_by,
            "approved_at": license.approved_at,
            "rejection_reason": license.rejection_reason,
            "subscription_id": license.subscription_id,
            "parent_license_id": license.parent_license_id,
            "metadata": dict(license.metadata),
            "created_at": license.created_at,
            "updated_at": license.updated_at,
        }
        model, created = LicenseModel.objects.get_or_create(id=license.id, defaults=values)
        # Update if exists
        if not created:
            for name, value in values.items():
                if name != "created_at":
                    setattr(model, name, value)
        return model

    @sync_to_async
    def save(self, license: License) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        model = self._to_model(license)
        model.save()
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        try:
            model = LicenseModel.objects.get(id=license_id)
            return self._to_domain(model)
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_key(self, license_key: str) -> Optional[License]:
        try:
            model = LicenseModel.objects.get(license_key=license_key)
            return self._to_domain(model)
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_user(self, user_id: str) -> List[License]:
        models = LicenseModel.objects.filter(issued_to=user_id).order_by("-created_at")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_active(self, now: datetime) -> List[License]:
        models = LicenseModel.objects.filter(
            status=LicenseStatus.ACTIVE.value,
            approval_status=LicenseApprovalStatus.APPROVED.value,
            valid_from__lte=now,
            valid_until__gte=now,
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_expired(self, now: datetime) -> List[License]:
        models = LicenseModel.objects.filter(
            status__in=[LicenseStatus.ACTIVE.value, LicenseStatus.PENDING.value],
            valid_until__lt=now,
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_pending_approval(self) -> List[License]:
        models = LicenseModel.objects.filter(
            approval_status=LicenseApprovalStatus.PENDING.value
        ).order_by("created_at")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def update_status(
        self, license_id: uuid.UUID, status: LicenseStatus, now: datetime
    ) -> None:
        LicenseModel.objects.filter(id=license_id).update(status=status.value, updated_at=now)

    @sync_to_async
    def update_approval_status(
        self,
        license_id: uuid.UUID,
        approval_status: LicenseApprovalStatus,
        now: datetime,
        approved_by: Optional[str] = None,
        rejection_reason: Optional[str] = None,
    ) -> None:
        changes = {"approval_status": approval_status.value, "updated_at": now}
        if approval_status == LicenseApprovalStatus.APPROVED:
            changes.update(approved_by=approved_by, approved_at=now, rejection_reason=None)
        elif approval_status == LicenseApprovalStatus.REJECTED:
            changes["rejection_reason"] = rejection_reason
        LicenseModel.objects.filter(id=license_id).update(**changes)

    @sync_to_async
    def count(self) -> int:
        return LicenseModel.objects.count()

    @sync_to_async
    def count_by_status(self, status: LicenseStatus) -> int:
        return LicenseModel.objects.filter(status=status.value).count()

    @sync_to_async
    def count_by_type(self, license_type: LicenseType) -> int:
        return LicenseModel.objects.filter(license_type=license_type.value).count()

    @sync_to_async
    def delete(self, license_id: uuid.UUID) -> bool:
        """
        Delete a license.

        Approvals and audit entries referencing it are removed by the
        cascading foreign keys on their models.
        """
        _, deleted = LicenseModel.objects.filter(id=license_id).delete()
        return deleted.get(LicenseModel._meta.label, 0) > 0
