"""
App configuration for License Governance Service.
"""
import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class LicenseGovernanceServiceConfig(AppConfig):
    """App configuration for LicenseGovernanceService."""

    name = "LicenseGovernanceService"
    verbose_name = "License Governance Service"

    def ready(self):
        """Register domain event handlers once apps are loaded."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()
        logger.debug("License governance event handlers ready")
