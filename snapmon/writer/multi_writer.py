"""
Writer that fans samples out to several writers.
"""

import logging
from typing import List

from snapmon.metrics import Sample
from snapmon.writer.base import Writer

LOG = logging.getLogger(__name__)

class MultiWriter(Writer):

    def __init__(self, writers: List[Writer]):
        self.writers = list(writers)

    def write(self, samples: List[Sample], loop_iteration: int = 1) -> bool:
        success = True
        for writer in self.writers:
            try:
                if not writer.write(samples, loop_iteration):
                    success = False
            except Exception as e:
                LOG.error(f"{type(writer).__name__} failed: {e}")
                success = False
        return success

    def close(self, timeout_seconds: int = 90) -> None:
        for writer in self.writers:
            try:
                writer.close(timeout_seconds=timeout_seconds)
            except Exception as e:
                LOG.warning(f"Error closing {type(writer).__name__}: {e}")
