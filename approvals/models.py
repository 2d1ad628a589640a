"""
Model registry for the approvals app.
"""
from approvals.infrastructure.models import LicenseApproval  # noqa: F401
