"""
Email notification of owners about approval requests.
"""
import logging

from asgiref.sync import sync_to_async
from django.core.mail import send_mail

from approvals.domain.approval import LicenseApproval
from approvals.ports.owner_notifier import OwnerNotifier
from owners.ports.owner_management_repository import OwnerManagementRepository
from owners.ports.user_directory import UserDirectory

logger = logging.getLogger(__name__)

APPROVAL_REQUEST_PREFERENCE = "email_on_approval_request"


class EmailOwnerNotifier(OwnerNotifier):
    """
    Sends one email to every owner who opted in to approval requests.

    Owners without an email address in the user directory are skipped.
    """

    def __init__(
        self,
        owner_repository: OwnerManagementRepository,
        user_directory: UserDirectory,
        from_email: str,
    ):
        self.owner_repository = owner_repository
        self.user_directory = user_directory
        self.from_email = from_email

    async def notify_owners(self, approval: LicenseApproval) -> None:
        recipients = []
        for owner in await self.owner_repository.find_all():
            if not owner.settings.notification_preferences.get(APPROVAL_REQUEST_PREFERENCE):
                continue
            user = await self.user_directory.find_by_id(owner.owner_id)
            if user and user.email:
                recipients.append(user.email)

        if not recipients:
            logger.debug("No owners to notify about approval %s", approval.id)
            return

        subject = f"License approval requested ({approval.priority.value} priority)"
        message = (
            f"{approval.requested_by} requested a {approval.approval_type.value} approval "
            f"for license {approval.license_id}.\n"
            f"Approval ID: {approval.id}\n"
            f"Expires at: {approval.expires_at.isoformat()}\n"
        )

        await sync_to_async(send_mail)(
            subject,
            message,
            self.from_email,
            recipients,
            fail_silently=False,
        )
        logger.info("Notified %d owner(s) about approval %s", len(recipients), approval.id)
