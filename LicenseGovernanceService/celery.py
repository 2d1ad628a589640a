"""
Celery configuration for background tasks.

Runs the periodic license governance sweeps scheduled by Celery beat.
"""
import os

from celery import Celery

# Set default Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicenseGovernanceService.settings.base")

app = Celery("LicenseGovernanceService")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()
