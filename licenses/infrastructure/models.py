"""
License and LicenseTemplate models.
"""
import uuid

from django.db import models
from django.utils import timezone

LICENSE_TYPE_CHOICES = [
    ("community", "Community"),
    ("trial", "Trial"),
    ("enterprise", "Enterprise"),
    ("custom", "Custom"),
]


class LicenseTemplate(models.Model):
    """
    Reusable defaults for new licenses.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, default="")
    license_type = models.CharField(max_length=20, choices=LICENSE_TYPE_CHOICES)
    default_features = models.JSONField(default=dict, blank=True)
    default_limits = models.JSONField(default=dict, blank=True)
    default_validity_days = models.IntegerField(default=365)
    requires_approval = models.BooleanField(default=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_by = models.CharField(max_length=255)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "license_templates"
        ordering = ["name"]

    def __str__(self):
        return self.name


class License(models.Model):
    """
    A time-bounded grant of features and quota limits to a user.
    """

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("active", "Active"),
        ("suspended", "Suspended"),
        ("expired", "Expired"),
        ("revoked", "Revoked"),
    ]

    APPROVAL_STATUS_CHOICES = [
        ("pending", "Pending"),
        ("approved", "Approved"),
        ("rejected", "Rejected"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license_key = models.CharField(max_length=100, unique=True, db_index=True)
    license_type = models.CharField(max_length=20, choices=LICENSE_TYPE_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    issued_to = models.CharField(max_length=255, db_index=True)
    issued_by = models.CharField(max_length=255)
    valid_from = models.DateTimeField()
    valid_until = models.DateTimeField()
    features = models.JSONField(default=dict, blank=True)
    limits = models.JSONField(default=dict, blank=True, help_text="-1 means unlimited")
    approval_status = models.CharField(
        max_length=20, choices=APPROVAL_STATUS_CHOICES, default="pending"
    )
    approved_by = models.CharField(max_length=255, null=True, blank=True)
    approved_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(null=True, blank=True)
    subscription_id = models.CharField(max_length=255, null=True, blank=True)
    parent_license_id = models.UUIDField(null=True, blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "approval_status"]),
            models.Index(fields=["issued_to", "status"]),
            models.Index(fields=["valid_until"]),
        ]

    def __str__(self):
        return f"{self.license_key} ({self.status})"
