"""
Owners module - Owner permissions, delegation and access control.

This module handles:
- OwnerManagement records with permission flags and settings
- Owner permission checks and license access predicates
- Delegation and auto-approval configuration
- Lookup of users in the Django auth user table
"""
