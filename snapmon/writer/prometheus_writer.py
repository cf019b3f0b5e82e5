"""
Prometheus exporter writer for the SnapRoute telemetry collector.
"""

import logging
import re
import threading
from typing import Dict, Iterator, List, Optional

from prometheus_client import CollectorRegistry, start_http_server
from prometheus_client.core import Metric

from snapmon.metrics import MetricKind, Sample
from snapmon.writer.base import Writer

# Initialize logger
LOG = logging.getLogger(__name__)

METRIC_PREFIX = 'snaproute'

def sanitize_name(name: str) -> str:
    """Map a measurement, field or tag name onto the Prometheus name charset."""
    name = re.sub(r'[^a-zA-Z0-9_]', '_', name)
    if name and name[0].isdigit():
        name = f"_{name}"
    return name

class SampleCollector:
    """
    Custom collector exposing the samples of the most recent cycle.

    Numeric values become gauges (counters for COUNTER samples), booleans
    become 0/1 gauges, and text values become ``*_info`` gauges of 1 with the
    text in a ``value`` label.
    """

    def __init__(self, prefix: str = METRIC_PREFIX):
        self.prefix = prefix
        self._samples: List[Sample] = []
        self._lock = threading.Lock()

    def update(self, samples: List[Sample]) -> None:
        with self._lock:
            self._samples = list(samples)

    def describe(self) -> List[Metric]:
        return []

    def collect(self) -> Iterator[Metric]:
        with self._lock:
            samples = list(self._samples)

        families: Dict[str, Metric] = {}
        for sample in samples:
            labels = {sanitize_name(key): value for key, value in sample.tags.items()}
            for field_name, value in sample.fields.items():
                name = sanitize_name(f"{self.prefix}_{sample.measurement}_{field_name}")
                sample_labels = labels
                if isinstance(value, bool):
                    value, metric_type = float(value), 'gauge'
                elif isinstance(value, (int, float)):
                    metric_type = 'counter' if sample.kind is MetricKind.COUNTER else 'gauge'
                else:
                    name = f"{name}_info"
                    sample_labels = dict(labels, value=str(value))
                    value, metric_type = 1.0, 'gauge'

                family = families.get(name)
                if family is None:
                    family = Metric(name, f"SnapRoute {sample.measurement} {field_name}", metric_type)
                    families[name] = family
                sample_name = f"{family.name}_total" if family.type == 'counter' else family.name
                family.add_sample(sample_name, sample_labels, float(value))

        yield from families.values()

class PrometheusWriter(Writer):
    """
    Writer that serves the latest cycle's samples for scraping.
    """

    def __init__(self, port: int = 8000, registry: Optional[CollectorRegistry] = None, start_server: bool = True):
        """
        Args:
            port: Port to serve Prometheus metrics on (default: 8000)
            registry: Registry to register with; a private one by default
            start_server: Start the HTTP server on first write
        """
        self.port = port
        self.start_server = start_server
        self.server_started = False
        self.server_lock = threading.Lock()

        # Custom registry to avoid conflicts with the default registry
        self.prometheus_registry = registry or CollectorRegistry()
        self.collector = SampleCollector()
        self.prometheus_registry.register(self.collector)

        LOG.info(f"PrometheusWriter initialized, will serve metrics on port {port}")

    def _start_prometheus_server(self):
        """Start the Prometheus HTTP server if not already started."""
        with self.server_lock:
            if not self.server_started:
                try:
                    start_http_server(self.port, registry=self.prometheus_registry)
                    self.server_started = True
                    LOG.info(f"Prometheus metrics server started on port {self.port}")
                except Exception as e:
                    LOG.error(f"Failed to start Prometheus server on port {self.port}: {e}")
                    raise

    def write(self, samples: List[Sample], loop_iteration: int = 1) -> bool:
        if self.start_server and not self.server_started:
            try:
                self._start_prometheus_server()
            except OSError:
                return False

        self.collector.update(samples)
        LOG.info(f"Updated Prometheus exposition with {len(samples)} samples")
        return True
