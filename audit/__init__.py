"""
Audit module - Append-only history of license transitions.
"""
