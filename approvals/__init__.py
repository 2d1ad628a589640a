"""
Approvals module - Approval workflow for license changes.

This module handles:
- LicenseApproval entity and its pending to decided transitions
- Auto-approval criteria per owner
- Approval expiry and batch auto-processing
- Owner notification about new requests
"""
