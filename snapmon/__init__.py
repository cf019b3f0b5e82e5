"""
SnapRoute telemetry collector.

Polls the FlexSwitch REST API of a SnapRoute device and turns each state
endpoint into tagged metric samples.

- connection: HTTP and JSON-replay transports
- schema: pydantic models for every state endpoint
- collectors: per-domain emission tables and the collection cycle
- writer: output of accumulated samples (InfluxDB, Prometheus, JSON)
"""

__version__ = '1.0.0'
