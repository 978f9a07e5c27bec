"""
Periodic task scheduling for the reporting agent.
"""

from .periodic import PeriodicTask

__all__ = [
    "PeriodicTask",
]
