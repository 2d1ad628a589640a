"""
Celery tasks for periodic license governance sweeps.

Every sweep is idempotent; re-running one after a partial failure is safe.
"""
import asyncio
import logging

from LicenseGovernanceService.celery import app

from core.infrastructure.container import build_container

logger = logging.getLogger(__name__)


@app.task
def expire_license_approvals() -> int:
    """Expire pending approvals past their expiry."""
    container = build_container()
    count = asyncio.run(container.approval_workflow.expire_old_approvals())
    logger.info("Approval expiry sweep expired %d approval(s)", count)
    return count


@app.task
def auto_process_license_approvals() -> int:
    """Apply owners' auto-approval criteria to pending approvals."""
    container = build_container()
    count = asyncio.run(container.facade.auto_process_approvals())
    logger.info("Auto-approval sweep approved %d approval(s)", count)
    return count


@app.task
def check_license_expirations() -> int:
    """Mark licenses past their validity window as expired."""
    container = build_container()
    count = asyncio.run(container.facade.expire_stale_licenses())
    logger.info("License expiration sweep expired %d license(s)", count)
    return count


@app.task
def purge_license_audit_logs() -> int:
    """Delete audit entries older than the retention period."""
    container = build_container()
    count = asyncio.run(
        container.audit_service.purge_older_than(container.governance.audit_retention_days)
    )
    logger.info("Audit retention purge deleted %d entr(ies)", count)
    return count
