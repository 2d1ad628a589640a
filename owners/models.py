"""
Model registry for the owners app.
"""
from owners.infrastructure.models import OwnerManagement  # noqa: F401
