"""
Test settings for LicenseGovernanceService.
"""

from .base import *  # noqa: F403, F401

DEBUG = False

# Use in-memory SQLite for faster local tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Capture outgoing mail in django.core.mail.outbox
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

CELERY_TASK_ALWAYS_EAGER = True
CELERY_BROKER_URL = "memory://"

# Disable logging during tests
LOGGING_CONFIG = None
