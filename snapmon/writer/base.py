"""
Base writer interface for the SnapRoute telemetry collector.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from snapmon.metrics import Sample

# Initialize logger
LOG = logging.getLogger(__name__)

class Writer(ABC):
    """
    Base class for all writers.
    """

    @abstractmethod
    def write(self, samples: List[Sample], loop_iteration: int = 1) -> bool:
        """
        Write one cycle's samples to the destination.

        Args:
            samples: Samples drained from the accumulator
            loop_iteration: Current iteration number for debug file naming

        Returns:
            True if write was successful, False otherwise
        """
        pass

    def close(self, timeout_seconds: int = 90) -> None:
        """
        Optional method to close the writer and clean up resources.
        Default implementation does nothing - override in subclasses that need cleanup.
        """
        pass
