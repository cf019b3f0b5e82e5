"""
InfluxDB writer for the SnapRoute telemetry collector.
Writes samples to InfluxDB 3.x with second precision and client-side batching.

Note: batching follows batching_example.py from the https://github.com/InfluxCommunity/influxdb3-python project
License: Apache License, Version 2.0, January 2004 (http://www.apache.org/licenses/)
"""

import logging
import os
import time
from typing import Any, Dict, List, Optional

import requests
from influxdb_client_3 import InfluxDBClient3, Point, WriteOptions, WritePrecision, write_client_options
from influxdb_client_3.exceptions.exceptions import InfluxDBError

from snapmon.metrics import Sample
from snapmon.writer.base import Writer

LOG = logging.getLogger(__name__)

class BatchingCallback(object):
    """
    Callback handler for batched InfluxDB writes.

    Tracks write success/failure statistics for logging.
    """

    def __init__(self):
        self.write_status_msg = None
        self.write_count = 0
        self.error_count = 0
        self.retry_count = 0
        self.start = time.time_ns()

    def success(self, conf, data: str):
        """Called when a batch write succeeds."""
        self.write_count += 1
        self.write_status_msg = f"SUCCESS: {self.write_count} batches written"
        LOG.debug(f"Batch write successful: {len(data)} bytes")

    def error(self, conf, data: str, exception: InfluxDBError):
        """Called when a batch write fails permanently."""
        self.error_count += 1
        self.write_status_msg = f"FAILURE: {exception}"
        LOG.error(f"Batch write failed: {len(data)} bytes, error: {exception}")

    def retry(self, conf, data: str, exception: InfluxDBError):
        """Called when a batch write fails but will be retried."""
        self.retry_count += 1
        LOG.warning(f"Batch write retry {self.retry_count}: {len(data)} bytes, error: {exception}")

    def get_stats(self) -> Dict[str, Any]:
        return {
            'writes': self.write_count,
            'errors': self.error_count,
            'retries': self.retry_count,
            'elapsed_ms': (time.time_ns() - self.start) // 1_000_000,
            'status': self.write_status_msg
        }

def sample_to_point(sample: Sample) -> Point:
    """Convert a sample to an InfluxDB Point, dropping empty tags."""
    point = Point(sample.measurement)
    for tag_key, tag_value in sample.tags.items():
        # InfluxDB rejects empty tag values, e.g. a missing mgmt-ipv6
        if tag_value:
            point = point.tag(tag_key, tag_value)
    for field_key, field_value in sample.fields.items():
        if field_value is not None:
            point = point.field(field_key, field_value)
    return point.time(sample.time, WritePrecision.S)

class InfluxDBWriter(Writer):
    """
    Writer implementation for InfluxDB 3.x.
    """

    def __init__(self, config: Dict[str, Any], client: Optional[InfluxDBClient3] = None):
        """Initialize InfluxDB writer with configuration."""
        self.url = config.get('influxdb_url') or os.getenv('INF_URL', 'https://influxdb:8181')
        self.token = config.get('influxdb_token') or os.getenv('INF_TOKEN', '')
        self.database = config.get('influxdb_database') or os.getenv('INF_DATABASE', 'snaproute')
        self.tls_ca = config.get('tls_ca', None)

        self.batch_size = 500
        self.flush_interval = 10_000  # 10 seconds, one default collection interval
        self.batch_callback = BatchingCallback()

        self.client = client
        if self.client is None:
            self._initialize_client()

        LOG.info(f"InfluxDBWriter initialized: {self.url} -> {self.database}")

    def _initialize_client(self):
        """Initialize the InfluxDB client with batching and TLS configuration."""
        write_options = WriteOptions(
            batch_size=self.batch_size,
            flush_interval=self.flush_interval,
            jitter_interval=2_000,       # 2 seconds
            retry_interval=5_000,        # 5 seconds
            max_retries=5,
            max_retry_delay=30_000,      # 30 seconds
            max_close_wait=120_000,      # 2 minutes - enough time for cleanup
            exponential_base=2
        )

        wco = write_client_options(
            success_callback=self.batch_callback.success,
            error_callback=self.batch_callback.error,
            retry_callback=self.batch_callback.retry,
            write_options=write_options
        )

        client_kwargs = {
            'host': self.url,
            'database': self.database,
            'token': self.token,
            'enable_gzip': True,
            'write_client_options': wco,
            'timeout': 60000  # milliseconds
        }

        if self.tls_ca and os.path.exists(self.tls_ca):
            LOG.info(f"Using custom CA certificate: {self.tls_ca}")
            client_kwargs['ssl_ca_cert'] = self.tls_ca
        elif self.tls_ca:
            LOG.warning(f"CA certificate path specified but file not found: {self.tls_ca}")

        try:
            self.client = InfluxDBClient3(**client_kwargs)
        except Exception as e:
            LOG.error(f"Failed to create InfluxDB client: {e}")
            raise

        self._ensure_database_exists()

    def _ensure_database_exists(self):
        """Ensure the target database exists, creating it if necessary."""
        headers = {
            'Authorization': f'Bearer {self.token}',
            'Accept': 'application/json'
        }
        verify_tls = self.tls_ca if self.tls_ca and os.path.exists(self.tls_ca) else True

        try:
            response = requests.get(f"{self.url}/api/v3/configure/database?format=json",
                                    headers=headers, timeout=10, verify=verify_tls)
            if response.status_code != 200:
                LOG.warning(f"Failed to check database existence: HTTP {response.status_code}")
                return

            databases_data = response.json()
            if isinstance(databases_data, list) and databases_data and isinstance(databases_data[0], dict):
                databases = [db_obj.get("iox::database") for db_obj in databases_data]
            elif isinstance(databases_data, list):
                databases = databases_data
            elif isinstance(databases_data, dict):
                databases = databases_data.get('databases', [])
            else:
                databases = []

            if self.database in databases:
                LOG.info(f"Database '{self.database}' already exists")
                return

            LOG.info(f"Database '{self.database}' does not exist, creating it")
            create_response = requests.post(f"{self.url}/api/v3/configure/database",
                                             json={"db": self.database}, headers=headers,
                                             timeout=10, verify=verify_tls)
            if create_response.status_code in [200, 201, 204]:
                LOG.info(f"Successfully created database '{self.database}'")
            else:
                LOG.error(f"Failed to create database '{self.database}': HTTP {create_response.status_code}")
        except (requests.exceptions.RequestException, ValueError) as db_error:
            LOG.warning(f"Could not verify database existence (will be created on first write): {db_error}")

    def write(self, samples: List[Sample], loop_iteration: int = 1) -> bool:
        """
        Submit samples to the client's batching write API.

        Returns:
            bool: True if every point was accepted by the client
        """
        if not self.client:
            LOG.error("InfluxDB client not available")
            return False

        success = True
        written_count = 0
        for sample in samples:
            try:
                self.client.write(record=sample_to_point(sample))
                written_count += 1
            except Exception as e:
                LOG.error(f"Failed to write {sample.measurement} point: {e}")
                success = False

        LOG.info(f"InfluxDB write submitted: {written_count} points (iteration {loop_iteration}, batched by client)")
        return success

    def close(self, timeout_seconds: int = 90) -> None:
        if not self.client:
            return
        LOG.info(f"Closing InfluxDB client, write stats: {self.batch_callback.get_stats()}")
        try:
            self.client.close()
        except Exception as e:
            LOG.warning(f"Error closing InfluxDB client: {e}")
        self.client = None
