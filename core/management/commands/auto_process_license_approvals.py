"""
Django management command to run the auto-approval sweep.
"""

import asyncio
import logging

from django.core.management.base import BaseCommand

from core.infrastructure.container import build_container

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to auto-approve pending approvals matching owner criteria."""

    help = "Apply owners' auto-approval criteria to pending license approvals"

    def handle(self, *args, **options):
        """Execute the command."""
        container = build_container()
        count = asyncio.run(container.facade.auto_process_approvals())
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Auto-approved {count} approval(s)"))
