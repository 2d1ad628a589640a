"""
Development settings for LicenseGovernanceService.
"""

from .base import *  # noqa: F403, F401
from .logging import get_logging_config

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

# Email backend for development
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"

# Run Celery tasks inline unless a broker is configured
CELERY_TASK_ALWAYS_EAGER = True

LOGGING = get_logging_config("development")
