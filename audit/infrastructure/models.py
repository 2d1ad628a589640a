"""
LicenseAuditLog model.
"""
import uuid

from django.db import models
from django.utils import timezone


class LicenseAuditLog(models.Model):
    """
    Immutable audit trail of license transitions.
    """

    ACTION_CHOICES = [
        ("created", "Created"),
        ("activated", "Activated"),
        ("suspended", "Suspended"),
        ("reactivated", "Reactivated"),
        ("renewed", "Renewed"),
        ("revoked", "Revoked"),
        ("expired", "Expired"),
        ("modified", "Modified"),
        ("approved", "Approved"),
        ("rejected", "Rejected"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        "licenses.License",
        on_delete=models.CASCADE,
        db_constraint=False,
        related_name="audit_entries",
    )
    action = models.CharField(max_length=20, choices=ACTION_CHOICES)
    performed_by = models.CharField(max_length=255, help_text="Who performed the action")
    previous_state = models.JSONField(default=dict, blank=True)
    new_state = models.JSONField(default=dict)
    reason = models.TextField(null=True, blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "license_audit_logs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["license", "created_at"]),
            models.Index(fields=["action", "performed_by"]),
        ]

    def __str__(self):
        return f"{self.action} - license {self.license_id}"
