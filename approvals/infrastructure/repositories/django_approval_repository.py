"""
Django implementation of ApprovalRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from approvals.domain.approval import LicenseApproval
from approvals.infrastructure.models import LicenseApproval as LicenseApprovalModel
from approvals.ports.approval_repository import ApprovalRepository
from core.domain.value_objects import ApprovalPriority, ApprovalStatus, ApprovalType


class DjangoApprovalRepository(ApprovalRepository):
    """Django ORM implementation of ApprovalRepository."""

    def _to_domain(self, model: LicenseApprovalModel) -> LicenseApproval:
        """
        Convert Django model to domain entity.

        Args:
            model: Django LicenseApproval model

        Returns:
            LicenseApproval domain entity
        """
        return LicenseApproval(
            id=model.id,
            license_id=model.license_id,
            requested_by=model.requested_by,
            approval_type=ApprovalType(model.approval_type),
            status=ApprovalStatus(model.status),
            priority=ApprovalPriority(model.priority),
            expires_at=model.expires_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
            request_data=dict(model.request_data or {}),
            approved_by=model.approved_by,
            approved_at=model.approved_at,
            rejected_by=model.rejected_by,
            rejected_at=model.rejected_at,
            decision_reason=model.decision_reason,
        )

    def _decision_fields(self, approval: LicenseApproval) -> dict:
        return {
            "status": approval.status.value,
            "approved_by": approval.approved_by,
            "approved_at": approval.approved_at,
            "rejected_by": approval.rejected_by,
            "rejected_at": approval.rejected_at,
            "decision_reason": approval.decision_reason,
            "updated_at": approval.updated_at,
        }

    @sync_to_async
    def save(self, approval: LicenseApproval) -> LicenseApproval:
        """
        Save an approval entity.

        Args:
            approval: LicenseApproval to save

        Returns:
            Saved approval
        """
        defaults = {
            "license_id": approval.license_id,
            "requested_by": approval.requested_by,
            "approval_type": approval.approval_type.value,
            "request_data": dict(approval.request_data),
            "priority": approval.priority.value,
            "priority_rank": approval.priority.rank,
            "expires_at": approval.expires_at,
            "created_at": approval.created_at,
        }
        defaults.update(self._decision_fields(approval))
        model, _ = LicenseApprovalModel.objects.update_or_create(
            id=approval.id, defaults=defaults
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, approval_id: uuid.UUID) -> Optional[LicenseApproval]:
        try:
            return self._to_domain(LicenseApprovalModel.objects.get(id=approval_id))
        except LicenseApprovalModel.DoesNotExist:
            return None

    @sync_to_async
    def find_pending(self) -> List[LicenseApproval]:
        models = LicenseApprovalModel.objects.filter(
            status=ApprovalStatus.PENDING.value
        ).order_by("-priority_rank", "created_at")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_by_license(self, license_id: uuid.UUID) -> List[LicenseApproval]:
        models = LicenseApprovalModel.objects.filter(license_id=license_id).order_by(
            "-created_at"
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def update_if_pending(self, approval: LicenseApproval) -> bool:
        """
        Write a decision with a conditional update.

        Only a row that is still pending matches, so of two concurrent
        decisions exactly one is stored.
        """
        updated = LicenseApprovalModel.objects.filter(
            id=approval.id, status=ApprovalStatus.PENDING.value
        ).update(**self._decision_fields(approval))
        return updated == 1

    @sync_to_async
    def expire_pending_before(self, now: datetime) -> int:
        return LicenseApprovalModel.objects.filter(
            status=ApprovalStatus.PENDING.value, expires_at__lt=now
        ).update(status=ApprovalStatus.EXPIRED.value, updated_at=now)

    @sync_to_async
    def count_by_status(self, status: ApprovalStatus) -> int:
        return LicenseApprovalModel.objects.filter(status=status.value).count()
