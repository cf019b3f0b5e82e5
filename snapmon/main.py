#!/usr/bin/env python3

# -----------------------------------------------------------------------------
# Copyright (c) 2026 SnapRoute Telemetry Collector contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Entry point for the SnapRoute telemetry collector.

Each iteration runs one collection cycle against the device API (or a
directory of captured responses) and hands the samples to the configured
writer:
- collectors: walk the FlexSwitch state endpoints and emit samples
- connection: HTTP and replay transports
- writer: output samples to InfluxDB, Prometheus or JSON files
"""

import argparse
import logging
import os
import sys
import time

from snapmon.collectors.collector import SnapRouteCollector
from snapmon.config import OUTPUT_CHOICES, Settings
from snapmon.connection import HttpTransport, get_session
from snapmon.connection.replay import ReplayTransport
from snapmon.errors import CollectionError
from snapmon.metrics import Accumulator
from snapmon.writer.factory import WriterFactory

FORMAT = '%(asctime)s - %(levelname)s - %(funcName)s - %(lineno)d - %(message)s'
DATEFMT = '%Y-%m-%dT%H:%M:%SZ'


def build_parser() -> argparse.ArgumentParser:
    # Options that can also come from the config file or environment default to None
    parser = argparse.ArgumentParser(description="Collect SnapRoute switch metrics")
    parser.add_argument('--config', type=str, default=None,
        help='Path to YAML config file. Without it settings are read from the environment and .env.')
    parser.add_argument('--url', type=str, default=None,
        help='SnapRoute API prefix. Default: http://localhost:8080/public/v1/')
    parser.add_argument('--isBarefoot', action='store_true',
        help='Mark the device as a Barefoot platform.')
    parser.add_argument('--intervalTime', type=float, default=None,
        help='Collection interval in seconds. Default: 10')
    parser.add_argument('--maxIterations', type=int, default=None,
        help='Maximum number of collection iterations to run before exiting. Default: 0 (run indefinitely).')
    parser.add_argument('--output', choices=list(OUTPUT_CHOICES), default=None,
        help='Output destination: influxdb (default), prometheus (metrics server), both, or json.')
    parser.add_argument('--influxdbUrl', type=str, default=None,
        help='InfluxDB server URL. Example: https://db.example.com:8181')
    parser.add_argument('--influxdbDatabase', type=str, default=None,
        help='InfluxDB database name.')
    parser.add_argument('--influxdbToken', type=str, default=None,
        help='InfluxDB authentication token.')
    parser.add_argument('--tlsCa', type=str, default=None,
        help='Path to CA certificate for verifying API/InfluxDB TLS connections (if not in system trust store).')
    parser.add_argument('--prometheusPort', type=int, default=None,
        help='Port for Prometheus metrics server. Default: 8000')
    parser.add_argument('--toJson', type=str, default=None,
        help='Directory to write each cycle\'s samples to as JSON instead of a database.')
    parser.add_argument('--fromJson', type=str, default=None,
        help='Directory of captured API responses to replay instead of querying the device.')
    parser.add_argument('--logfile', type=str, default=None,
        help='Path to log file. If not provided, logs to console only.')
    parser.add_argument('--loglevel', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], default='INFO',
        help='Log level for both console and file output. Default: INFO')
    parser.add_argument('--noPagination', action='store_true',
        help='Read only the first page of list endpoints.')
    parser.add_argument('--emitDeltas', action='store_true',
        help='Also emit per-port counter deltas against the previous cycle.')
    return parser


def configure_logging(logfile, loglevel: str) -> None:
    log_level = getattr(logging, loglevel.upper())

    if logfile:
        logfile_dir = os.path.dirname(logfile) if os.path.dirname(logfile) else '.'
        if os.path.exists(logfile_dir) and os.access(logfile_dir, os.W_OK):
            try:
                logging.basicConfig(filename=logfile, level=log_level, format=FORMAT, datefmt=DATEFMT)
                logging.info('Logging to file: ' + logfile)
            except OSError as e:
                logging.basicConfig(level=log_level, format=FORMAT, datefmt=DATEFMT)
                logging.error(f'Failed to configure file logging to {logfile}: {e}')
                logging.warning('Falling back to console logging only')
        else:
            logging.basicConfig(level=log_level, format=FORMAT, datefmt=DATEFMT)
            logging.error(f'Logfile directory {logfile_dir} does not exist or is not writable')
            logging.warning('Falling back to console logging only')
    else:
        logging.basicConfig(level=log_level, format=FORMAT, datefmt=DATEFMT)

    # Never allow requests/urllib3 to log below INFO
    requests_level = max(log_level, logging.INFO)
    logging.getLogger("requests").setLevel(level=requests_level)
    logging.getLogger("urllib3").setLevel(level=requests_level)
    logging.getLogger("influxdb_client_3").setLevel(level=log_level)


def build_transport(settings):
    if settings.from_json:
        return ReplayTransport(settings.from_json, settings.url)

    session = get_session()
    if settings.tls_ca:
        session.verify = settings.tls_ca
    return HttpTransport(session=session, timeout=settings.http_timeout)


def run_loop(collector: SnapRouteCollector, writer, interval_time: float, max_iterations: int) -> int:
    """
    Gather, write and sleep until max_iterations is reached (0 runs forever).

    Returns the number of iterations completed.
    """
    LOG = logging.getLogger(__name__)
    acc = Accumulator()
    loop_iteration = 1
    while True:
        time_start = time.time()
        LOG.info(f"Starting collection iteration {loop_iteration} of {max_iterations if max_iterations > 0 else 'unlimited'}")

        try:
            collector.gather(acc)
        except CollectionError as e:
            LOG.error(f"Collection cycle failed: {e}")

        samples = acc.drain()
        if samples:
            if not writer.write(samples, loop_iteration):
                LOG.warning(f"Writer reported a failure for iteration {loop_iteration}")
        else:
            LOG.info("No samples collected this iteration")

        if max_iterations > 0 and loop_iteration >= max_iterations:
            LOG.info(f"Reached maxIterations={max_iterations}, exiting")
            return loop_iteration

        time_difference = time.time() - time_start
        LOG.info(f"Iteration {loop_iteration} took {time_difference:.2f}s")
        time.sleep(max(0.0, interval_time - time_difference))
        loop_iteration += 1


def main(argv=None):
    CMD = build_parser().parse_args(argv)
    configure_logging(CMD.logfile, CMD.loglevel)
    LOG = logging.getLogger(__name__)

    if CMD.config is not None:
        settings = Settings(config_file=CMD.config, from_env=False)
    else:
        settings = Settings(from_env=True)
    settings.apply_cli(CMD)

    if settings.interval_time <= 0:
        print("Error: --intervalTime must be a positive number of seconds.", file=sys.stderr)
        sys.exit(1)
    if settings.max_iterations < 0:
        print("Error: --maxIterations must be a non-negative integer.", file=sys.stderr)
        sys.exit(1)
    if settings.from_json and not os.path.isdir(settings.from_json):
        LOG.error(f"JSON directory does not exist: {settings.from_json}")
        sys.exit(1)

    if settings.from_json:
        LOG.info(f"Running in JSON replay mode from directory: {settings.from_json}")
    else:
        LOG.info(f"Collecting from {settings.url}")

    transport = build_transport(settings)
    collector = SnapRouteCollector(
        url=settings.url,
        is_barefoot=settings.is_barefoot,
        transport=transport,
        follow_pagination=settings.follow_pagination,
        max_pages=settings.max_pages,
        emit_deltas=settings.emit_deltas,
    )
    writer = WriterFactory.create_writer(settings)
    LOG.info(f"Writer initialized for output: {settings.output}")

    try:
        run_loop(collector, writer, settings.interval_time, settings.max_iterations)
    except KeyboardInterrupt:
        LOG.info("Interrupted, shutting down")
    finally:
        writer.close()
        transport.close()


if __name__ == '__main__':
    main()
