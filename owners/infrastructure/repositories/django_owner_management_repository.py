"""
Django implementation of OwnerManagementRepository port.
"""
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from owners.domain.owner_management import OwnerManagement, OwnerSettings
from owners.infrastructure.models import OwnerManagement as OwnerManagementModel
from owners.ports.owner_management_repository import OwnerManagementRepository


class DjangoOwnerManagementRepository(OwnerManagementRepository):
    """Django ORM implementation of OwnerManagementRepository."""

    def _to_domain(self, model: OwnerManagementModel) -> OwnerManagement:
        return OwnerManagement(
            id=model.id,
            owner_id=model.owner_id,
            permissions=dict(model.permissions or {}),
            settings=OwnerSettings.from_dict(model.settings),
            created_at=model.created_at,
            updated_at=model.updated_at,
            delegated_users=tuple(model.delegated_users or ()),
        )

    def _to_fields(self, owner: OwnerManagement) -> dict:
        return {
            "permissions": dict(owner.permissions),
            "settings": owner.settings.to_dict(),
            "auto_approval_enabled": owner.settings.auto_approval_enabled,
            "delegated_users": list(owner.delegated_users),
            "updated_at": owner.updated_at,
        }

    @sync_to_async
    def find_by_owner_id(self, owner_id: str) -> Optional[OwnerManagement]:
        try:
            return self._to_domain(OwnerManagementModel.objects.get(owner_id=owner_id))
        except OwnerManagementModel.DoesNotExist:
            return None

    @sync_to_async
    def get_or_create_default(self, owner_id: str, now: datetime) -> OwnerManagement:
        """
        Return the owner's record, inserting defaults if absent.

        A concurrent insert of the same owner loses on the unique
        constraint; the loser then reads the winner's row.
        """
        default = OwnerManagement.create_default(owner_id, now)
        defaults = self._to_fields(default)
        defaults.update(id=default.id, created_at=default.created_at)
        try:
            with transaction.atomic():
                model, _ = OwnerManagementModel.objects.get_or_create(
                    owner_id=owner_id, defaults=defaults
                )
        except IntegrityError:
            model = OwnerManagementModel.objects.get(owner_id=owner_id)
        return self._to_domain(model)

    @sync_to_async
    def save(self, owner: OwnerManagement) -> OwnerManagement:
        defaults = self._to_fields(owner)
        defaults.update(id=owner.id, created_at=owner.created_at)
        model, created = OwnerManagementModel.objects.get_or_create(
            owner_id=owner.owner_id, defaults=defaults
        )
        if not created:
            for name, value in self._to_fields(owner).items():
                setattr(model, name, value)
            model.save()
        return self._to_domain(model)

    @sync_to_async
    def find_all(self) -> List[OwnerManagement]:
        models = OwnerManagementModel.objects.order_by("created_at")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_with_auto_approval(self) -> List[OwnerManagement]:
        models = OwnerManagementModel.objects.filter(auto_approval_enabled=True).order_by(
            "created_at"
        )
        return [self._to_domain(model) for model in models]
