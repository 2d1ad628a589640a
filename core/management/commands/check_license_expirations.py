"""
Django management command to check and mark expired licenses.

This command should be run periodically (e.g., via cron or Celery beat).
"""

import asyncio
import logging

from django.core.management.base import BaseCommand
from django.utils import timezone

from core.infrastructure.container import build_container
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to check and mark expired licenses."""

    help = "Check and mark expired licenses"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - don't actually update licenses",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        if options["dry_run"]:
            stale = asyncio.run(DjangoLicenseRepository().find_expired(timezone.now()))
            self.stdout.write(f"Found {len(stale)} expired license(s)")
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            for license in stale[:10]:  # Show first 10
                self.stdout.write(
                    f"  - License {license.license_key} expired at {license.valid_until}"
                )
            return

        container = build_container()
        updated = asyncio.run(container.facade.expire_stale_licenses())

        self.stdout.write(
            # pylint: disable=no-member
            self.style.SUCCESS(f"Successfully marked {updated} license(s) as expired")
        )
