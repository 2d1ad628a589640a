"""
Django management command to expire lapsed approval requests.
"""

import asyncio
import logging

from django.core.management.base import BaseCommand

from core.infrastructure.container import build_container

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to expire pending approvals past their expiry."""

    help = "Expire pending license approvals past their expiry"

    def handle(self, *args, **options):
        """Execute the command."""
        container = build_container()
        count = asyncio.run(container.approval_workflow.expire_old_approvals())
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Expired {count} approval(s)"))
