"""
Django management command to apply the audit log retention policy.
"""

import asyncio
import logging

from django.core.management.base import BaseCommand

from core.infrastructure.container import build_container

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to purge old license audit entries."""

    help = "Delete license audit entries older than the retention period"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--days",
            type=int,
            default=None,
            help="Retention in days (defaults to LICENSE_GOVERNANCE AUDIT_RETENTION_DAYS)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        container = build_container()
        days = options["days"] or container.governance.audit_retention_days
        count = asyncio.run(container.audit_service.purge_older_than(days))
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Purged {count} audit entr(ies) older than {days} days"))
