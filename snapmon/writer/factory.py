"""
Writer factory for the SnapRoute telemetry collector.
"""

import logging
from typing import List

from snapmon.metrics import Sample
from snapmon.writer.base import Writer
from snapmon.writer.influxdb_writer import InfluxDBWriter
from snapmon.writer.json_writer import JsonWriter
from snapmon.writer.multi_writer import MultiWriter
from snapmon.writer.prometheus_writer import PrometheusWriter

# Initialize logger
LOG = logging.getLogger(__name__)

class WriterFactory:
    """
    Factory for creating writer instances based on configuration.
    """

    @staticmethod
    def create_writer(settings) -> Writer:
        """
        Create a writer from resolved settings.

        Args:
            settings: Settings with output, influxdb_*, tls_ca, prometheus_port and to_json

        Returns:
            Appropriate Writer instance
        """
        # JSON output takes precedence for debugging/replay
        if settings.to_json:
            LOG.info(f"Creating JSON writer with output directory: {settings.to_json}")
            return JsonWriter(settings.to_json)

        output_choice = settings.output or 'influxdb'

        if output_choice == 'json':
            LOG.error("JSON output selected but no output directory given (--toJson)")
            return _create_stub_writer()

        if output_choice == 'prometheus':
            LOG.info("Creating Prometheus writer")
            return PrometheusWriter(port=settings.prometheus_port)

        if output_choice == 'influxdb':
            if _influxdb_configured(settings):
                LOG.info(f"Creating InfluxDB writer with URL: {settings.influxdb_url}, database: {settings.influxdb_database}")
                return InfluxDBWriter(_influxdb_config(settings))
            LOG.error("InfluxDB output selected but missing connection parameters")
            return _create_stub_writer()

        if output_choice == 'both':
            LOG.info("Creating MultiWriter for both InfluxDB and Prometheus output")
            writers: List[Writer] = []
            if _influxdb_configured(settings):
                writers.append(InfluxDBWriter(_influxdb_config(settings)))
                LOG.info("Added InfluxDB writer to MultiWriter")
            else:
                LOG.error("InfluxDB configuration missing for 'both' output")

            writers.append(PrometheusWriter(port=settings.prometheus_port))
            LOG.info("Added Prometheus writer to MultiWriter")
            return MultiWriter(writers)

        LOG.warning(f"Unknown output '{output_choice}', using stub writer")
        return _create_stub_writer()

def _influxdb_configured(settings) -> bool:
    return bool(settings.influxdb_url and settings.influxdb_database and settings.influxdb_token)

def _influxdb_config(settings) -> dict:
    return {
        'influxdb_url': settings.influxdb_url,
        'influxdb_database': settings.influxdb_database,
        'influxdb_token': settings.influxdb_token,
        'tls_ca': settings.tls_ca,
    }

class StubWriter(Writer):
    """Writer that only logs what it would have written."""

    def write(self, samples: List[Sample], loop_iteration: int = 1) -> bool:
        LOG.info(f"Stub writer: Would write {len(samples)} samples")
        return True

def _create_stub_writer() -> Writer:
    return StubWriter()
