"""
Model registry for the licenses app.
"""
from licenses.infrastructure.models import License, LicenseTemplate  # noqa: F401
