"""
Managers for handling specific aspects of Stream Deck control.

- ConnectionManager: Device connection lifecycle and hot-plug
- IntervalManager: Periodic script runs with a single-flight guard
"""

from .connection import ConnectionManager
from .interval import IntervalManager, ScheduledInterval

__all__ = [
    "ConnectionManager",
    "IntervalManager",
    "ScheduledInterval",
]
