"""
JSON file writer for the SnapRoute telemetry collector.
"""

import json
import logging
import os
from datetime import datetime
from typing import List

from snapmon.metrics import Sample
from snapmon.writer.base import Writer

# Initialize logger
LOG = logging.getLogger(__name__)

class JsonWriter(Writer):
    """
    Writer that outputs each cycle's samples to a JSON file.
    """

    def __init__(self, output_dir: str, prefix: str = "snaproute"):
        """
        Args:
            output_dir: Directory where JSON files will be written
            prefix: File name prefix
        """
        self.output_dir = output_dir
        self.prefix = prefix
        os.makedirs(output_dir, exist_ok=True)
        LOG.info(f"JSON Writer initialized with output directory: {output_dir}")

    def _generate_filename(self, loop_iteration: int) -> str:
        timestamp = datetime.now().strftime('%Y%m%d%H%M%S')
        return os.path.join(self.output_dir, f"{self.prefix}_{timestamp}_{loop_iteration}.json")

    def write(self, samples: List[Sample], loop_iteration: int = 1) -> bool:
        file_path = self._generate_filename(loop_iteration)
        try:
            with open(file_path, 'w') as f:
                json.dump([sample.to_dict() for sample in samples], f, indent=2)
        except (OSError, TypeError, ValueError) as e:
            LOG.error(f"Failed to write {file_path}: {e}")
            return False
        LOG.info(f"Wrote {len(samples)} samples to {file_path}")
        return True
