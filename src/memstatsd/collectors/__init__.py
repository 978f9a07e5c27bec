"""
Runtime statistics providers.

This package provides the interface the reporting agent reads memory
statistics through, and the implementation for the running CPython
interpreter:

- AbstractStatsProvider: the provider contract
- RuntimeStatsProvider: psutil and gc based implementation
- GcPauseTracker: times garbage collection pauses via gc callbacks
"""

from .base import AbstractStatsProvider
from .gc_pause import GcPauseTracker
from .runtime_stats import RuntimeStatsProvider

__all__ = [
    "AbstractStatsProvider",
    "GcPauseTracker",
    "RuntimeStatsProvider",
]
