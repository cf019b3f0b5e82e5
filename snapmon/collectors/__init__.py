"""
Collectors package for the SnapRoute telemetry collector.

- domains.py: per-endpoint emission tables
- collector.py: the collection cycle (SnapRouteCollector.gather)
"""
