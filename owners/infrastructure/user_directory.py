"""
User directory backed by the Django auth user model.
"""
from typing import Optional

from asgiref.sync import sync_to_async
from django.contrib.auth import get_user_model

from core.config import DEFAULT_OWNER_ROLE_SLUG
from owners.ports.user_directory import UserDirectory, UserRecord

MEMBER_ROLE_SLUG = "global:member"


class DjangoUserDirectory(UserDirectory):
    """
    Looks users up by username.

    Superusers hold the owner role. Other users take the name of their
    first group as role slug, or the member role when they have none.
    """

    def __init__(self, owner_role_slug: str = DEFAULT_OWNER_ROLE_SLUG):
        self.owner_role_slug = owner_role_slug

    @sync_to_async
    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        User = get_user_model()
        try:
            user = User.objects.get(**{User.USERNAME_FIELD: user_id})
        except User.DoesNotExist:
            return None
        if not user.is_active:
            return None

        if user.is_superuser:
            role_slug = self.owner_role_slug
        else:
            group = user.groups.order_by("name").first()
            role_slug = group.name if group else MEMBER_ROLE_SLUG

        return UserRecord(id=user_id, role_slug=role_slug, email=user.email or None)
