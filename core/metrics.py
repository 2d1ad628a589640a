"""
Prometheus metrics for the license governance service.

Custom metrics for license lifecycle and approval workflow monitoring.
"""

from prometheus_client import Counter

# License metrics
licenses_created_total = Counter(
    "licenses_created_total",
    "Total licenses created",
    ["license_type"],
)

license_transitions_total = Counter(
    "license_transitions_total",
    "Total license state transitions",
    ["action"],
)

license_validations_total = Counter(
    "license_validations_total",
    "Total license validation checks",
    ["check", "outcome"],
)

# Approval metrics
approvals_submitted_total = Counter(
    "license_approvals_submitted_total",
    "Total approval requests submitted",
    ["approval_type", "priority"],
)

approvals_processed_total = Counter(
    "license_approvals_processed_total",
    "Total approval requests decided",
    ["status"],
)

approvals_auto_approved_total = Counter(
    "license_approvals_auto_approved_total",
    "Total approval requests approved by auto-approval criteria",
)

approvals_expired_total = Counter(
    "license_approvals_expired_total",
    "Total approval requests expired by the sweep",
)

# Access control metrics
permission_denials_total = Counter(
    "license_permission_denials_total",
    "Total owner permission checks that were denied",
    ["permission"],
)

# Error metrics
audit_write_failures_total = Counter(
    "license_audit_write_failures_total",
    "Total audit log writes that failed",
    ["action"],
)

notification_failures_total = Counter(
    "license_notification_failures_total",
    "Total owner notifications that failed",
)
