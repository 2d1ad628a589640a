"""
Base Django settings for LicenseGovernanceService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from celery.schedules import crontab

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-5m!q8v@z1w#e0r^t3y(u7i)o9p_a2s-d4f+g6h$j&k*l"
)

DEBUG = False

ALLOWED_HOSTS = []

# Application definition
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    # Local apps
    "LicenseGovernanceService.apps.LicenseGovernanceServiceConfig",
    "core",
    "licenses",
    "approvals",
    "audit",
    "owners",
]

# Database
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# License governance tunables (see core.config)
LICENSE_GOVERNANCE = {
    "OWNER_ROLE_SLUG": "global:owner",
    "APPROVAL_EXPIRY_DAYS": 7,
    "DEFAULT_VALIDITY_DAYS": 365,
    "RENEWAL_VALIDITY_DAYS": 365,
    "REPORT_RECENT_ACTIVITY_LIMIT": 20,
    "AUDIT_RETENTION_DAYS": 365,
    "NOTIFICATION_FROM_EMAIL": os.environ.get(
        "LICENSE_NOTIFICATION_FROM_EMAIL", "licensing@localhost"
    ),
}

# Email
EMAIL_BACKEND = "django.core.mail.backends.smtp.EmailBackend"
DEFAULT_FROM_EMAIL = LICENSE_GOVERNANCE["NOTIFICATION_FROM_EMAIL"]

# Celery
CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_TASK_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TIMEZONE = TIME_ZONE
CELERY_BEAT_SCHEDULE = {
    "expire-license-approvals": {
        "task": "core.tasks.expire_license_approvals",
        "schedule": crontab(minute=0),
    },
    "auto-process-license-approvals": {
        "task": "core.tasks.auto_process_license_approvals",
        "schedule": crontab(minute="*/15"),
    },
    "check-license-expirations": {
        "task": "core.tasks.check_license_expirations",
        "schedule": crontab(minute=30),
    },
    "purge-license-audit-logs": {
        "task": "core.tasks.purge_license_audit_logs",
        "schedule": crontab(hour=3, minute=0),
    },
}

# Observability
LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "production"))
