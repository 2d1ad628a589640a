"""
OwnerManagement model.
"""
import uuid

from django.db import models
from django.utils import timezone


class OwnerManagement(models.Model):
    """
    Permission flags, settings and delegates of one owner user.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner_id = models.CharField(max_length=255, unique=True)
    permissions = models.JSONField(default=dict)
    settings = models.JSONField(default=dict)
    auto_approval_enabled = models.BooleanField(
        default=False, db_index=True, help_text="Mirrors settings.auto_approval_enabled"
    )
    delegated_users = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "owner_management"
        ordering = ["created_at"]

    def __str__(self):
        return self.owner_id
