# -----------------------------------------------------------------------------
# Copyright (c) 2026 SnapRoute Telemetry Collector contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Samples and the accumulator that receives them during a collection cycle.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

LOG = logging.getLogger(__name__)


class MetricKind(Enum):
    """How a consumer should interpret a sample's values"""
    FIELD = "field"       # untyped state, usually text
    GAUGE = "gauge"       # instantaneous reading
    COUNTER = "counter"   # monotonically increasing total


@dataclass(frozen=True)
class Sample:
    measurement: str
    fields: Dict[str, Any]
    tags: Dict[str, str]
    time: datetime
    kind: MetricKind = MetricKind.FIELD

    def to_dict(self) -> Dict[str, Any]:
        return {
            'measurement': self.measurement,
            'kind': self.kind.value,
            'tags': dict(self.tags),
            'fields': dict(self.fields),
            'time': self.time.isoformat(),
        }


@dataclass
class Accumulator:
    """
    Collects samples emitted during a cycle until the runner hands them to a writer.
    """
    samples: List[Sample] = field(default_factory=list)

    def emit(self, kind: MetricKind, measurement: str, fields: Dict[str, Any],
             tags: Dict[str, str], timestamp: Optional[datetime] = None) -> None:
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)
        self.samples.append(Sample(measurement, dict(fields), dict(tags), timestamp, kind))

    def emit_field(self, measurement: str, fields: Dict[str, Any],
                   tags: Dict[str, str], timestamp: Optional[datetime] = None) -> None:
        self.emit(MetricKind.FIELD, measurement, fields, tags, timestamp)

    def emit_gauge(self, measurement: str, fields: Dict[str, Any],
                   tags: Dict[str, str], timestamp: Optional[datetime] = None) -> None:
        self.emit(MetricKind.GAUGE, measurement, fields, tags, timestamp)

    def emit_counter(self, measurement: str, fields: Dict[str, Any],
                     tags: Dict[str, str], timestamp: Optional[datetime] = None) -> None:
        self.emit(MetricKind.COUNTER, measurement, fields, tags, timestamp)

    def drain(self) -> List[Sample]:
        """Return everything collected so far and start over."""
        samples, self.samples = self.samples, []
        return samples

    def __len__(self) -> int:
        return len(self.samples)
