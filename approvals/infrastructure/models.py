"""
LicenseApproval model.
"""
import uuid

from django.db import models
from django.utils import timezone


class LicenseApproval(models.Model):
    """
    An approval request gating a license change.

    The license may not exist yet when the request is submitted, so the
    foreign key carries no database constraint.
    """

    APPROVAL_TYPE_CHOICES = [
        ("creation", "Creation"),
        ("renewal", "Renewal"),
        ("modification", "Modification"),
        ("revocation", "Revocation"),
    ]

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("approved", "Approved"),
        ("rejected", "Rejected"),
        ("expired", "Expired"),
    ]

    PRIORITY_CHOICES = [
        ("low", "Low"),
        ("medium", "Medium"),
        ("high", "High"),
        ("critical", "Critical"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        "licenses.License",
        on_delete=models.CASCADE,
        db_constraint=False,
        related_name="approvals",
    )
    requested_by = models.CharField(max_length=255)
    approval_type = models.CharField(max_length=20, choices=APPROVAL_TYPE_CHOICES)
    request_data = models.JSONField(default=dict, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    priority = models.CharField(max_length=20, choices=PRIORITY_CHOICES, default="medium")
    priority_rank = models.PositiveSmallIntegerField(default=2, help_text="Sort key for priority")
    expires_at = models.DateTimeField()
    approved_by = models.CharField(max_length=255, null=True, blank=True)
    approved_at = models.DateTimeField(null=True, blank=True)
    rejected_by = models.CharField(max_length=255, null=True, blank=True)
    rejected_at = models.DateTimeField(null=True, blank=True)
    decision_reason = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "license_approvals"
        ordering = ["-priority_rank", "created_at"]
        indexes = [
            models.Index(fields=["status", "expires_at"]),
            models.Index(fields=["license", "status"]),
        ]

    def __str__(self):
        return f"{self.approval_type} approval for {self.license_id} ({self.status})"
