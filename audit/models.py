"""
Model registry for the audit app.
"""
from audit.infrastructure.models import LicenseAuditLog  # noqa: F401
