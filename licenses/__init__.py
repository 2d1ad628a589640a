"""
Licenses module - License lifecycle and validation.

This module handles:
- License and LicenseTemplate entities and domain logic
- License key generation and format checks
- License lifecycle (create, activate, renew, suspend, reactivate, revoke)
- License validation against features and usage limits
"""
