"""
Core module for shared domain infrastructure.

This module contains:
- Domain events, exceptions, enums and the clock
- The in-memory event bus and its handlers
- Service wiring, settings access and metrics
- Celery tasks and management commands for periodic sweeps
"""
