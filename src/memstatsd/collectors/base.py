"""
Defines the abstract interface for runtime statistics providers.

A provider turns whatever the runtime exposes about its memory management
into a MemorySnapshot. The reporting agent only depends on this interface,
so tests (or alternative runtimes) can supply their own provider.
"""

import logging
from abc import ABC, abstractmethod

from ..models.snapshot import MemorySnapshot

logger = logging.getLogger(__name__)


class AbstractStatsProvider(ABC):
    """
    Abstract base class for runtime memory statistics providers.

    Subclasses implement `read_snapshot`. Reading is defined as non-failing:
    a provider always returns its best current view of the counters.
    """

    def start(self) -> None:
        """
        Prepare the provider before the first read (e.g. install hooks).

        The default implementation does nothing.
        """
        logger.debug(f"{self.__class__.__name__} started")

    def stop(self) -> None:
        """
        Release anything acquired in `start`.

        The default implementation does nothing.
        """
        logger.debug(f"{self.__class__.__name__} stopped")

    @abstractmethod
    def read_snapshot(self) -> MemorySnapshot:
        """
        Capture the current runtime memory counters.

        Returns:
            A MemorySnapshot describing the process at the time of the call.
        """
        pass
