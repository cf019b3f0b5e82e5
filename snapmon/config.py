# -----------------------------------------------------------------------------
# Copyright (c) 2026 SnapRoute Telemetry Collector contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from snapmon.collectors.collector import DEFAULT_MAX_PAGES, DEFAULT_URL

logger = logging.getLogger(__name__)

# Ensure .env from the project root is loaded for local CLI runs
load_dotenv(dotenv_path=Path(__file__).parent.parent / ".env")

OUTPUT_CHOICES = ('influxdb', 'prometheus', 'both', 'json')


class FileConfig(BaseModel):
    """Keys accepted in a YAML config file."""
    model_config = ConfigDict(extra='ignore')

    # Device API
    url: str = DEFAULT_URL
    is_barefoot: bool = False
    http_timeout: Optional[float] = None
    follow_pagination: bool = True
    max_pages: int = DEFAULT_MAX_PAGES
    emit_deltas: bool = False

    # Collection loop
    interval_time: float = 10.0
    max_iterations: int = 0

    # Output
    output: str = 'influxdb'
    inf_url: Optional[str] = None
    inf_database: Optional[str] = None
    inf_token: Optional[str] = None
    tls_ca: Optional[str] = None
    prometheus_port: int = 8000

    # JSON mode settings
    to_json: Optional[str] = None
    from_json: Optional[str] = None


class EnvConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra='ignore')

    # SnapRoute device settings
    SNAPROUTE_URL: str = Field(default=DEFAULT_URL)
    SNAPROUTE_IS_BAREFOOT: bool = Field(default=False)
    HTTP_TIMEOUT: Optional[float] = Field(default=None)
    FOLLOW_PAGINATION: bool = Field(default=True)
    MAX_PAGES: int = Field(default=DEFAULT_MAX_PAGES)
    EMIT_DELTAS: bool = Field(default=False)

    INTERVAL_TIME: float = Field(default=10.0)
    MAX_ITERATIONS: int = Field(default=0)

    # Core InfluxDB settings
    OUTPUT: str = Field(default='influxdb')
    INF_URL: str = Field(default="https://localhost:8181")
    INF_DATABASE: str = Field(default="snaproute")
    INF_TOKEN: Optional[str] = Field(default=None)
    TLS_CA: Optional[str] = Field(default=None)
    PROMETHEUS_PORT: int = Field(default=8000)

    TO_JSON: Optional[str] = Field(default=None)
    FROM_JSON: Optional[str] = Field(default=None)


class Settings:
    def __init__(self, config_file: Optional[str] = None, from_env: bool = False):
        self.from_env = from_env

        if from_env:
            logger.debug("Loading configuration from environment variables")
            env = EnvConfig()

            self.url = env.SNAPROUTE_URL
            self.is_barefoot = env.SNAPROUTE_IS_BAREFOOT
            self.http_timeout = env.HTTP_TIMEOUT
            self.follow_pagination = env.FOLLOW_PAGINATION
            self.max_pages = env.MAX_PAGES
            self.emit_deltas = env.EMIT_DELTAS

            self.interval_time = env.INTERVAL_TIME
            self.max_iterations = env.MAX_ITERATIONS

            self.output = env.OUTPUT
            self.influxdb_url = env.INF_URL
            self.influxdb_database = env.INF_DATABASE
            self.influxdb_token = env.INF_TOKEN
            self.tls_ca = env.TLS_CA
            self.prometheus_port = env.PROMETHEUS_PORT

            self.to_json = env.TO_JSON
            self.from_json = env.FROM_JSON

        else:
            # Load from YAML file
            logger.debug(f"Loading configuration from file: {config_file}")
            data = {}
            if config_file and os.path.exists(config_file):
                with open(config_file, 'r') as f:
                    data = yaml.safe_load(f) or {}
            elif config_file:
                logger.warning(f"Config file not found: {config_file}")
            file_config = FileConfig.model_validate(data)

            self.url = file_config.url
            self.is_barefoot = file_config.is_barefoot
            self.http_timeout = file_config.http_timeout
            self.follow_pagination = file_config.follow_pagination
            self.max_pages = file_config.max_pages
            self.emit_deltas = file_config.emit_deltas

            self.interval_time = file_config.interval_time
            self.max_iterations = file_config.max_iterations

            self.output = file_config.output
            self.influxdb_url = file_config.inf_url
            self.influxdb_database = file_config.inf_database
            self.influxdb_token = file_config.inf_token
            self.tls_ca = file_config.tls_ca
            self.prometheus_port = file_config.prometheus_port

            self.to_json = file_config.to_json
            self.from_json = file_config.from_json

        if not self.url.endswith('/'):
            # paths are appended without a separator
            self.url += '/'

    def apply_cli(self, args) -> None:
        """Override settings with command line arguments that were given."""
        overrides = {
            'url': args.url,
            'interval_time': args.intervalTime,
            'max_iterations': args.maxIterations,
            'output': args.output,
            'influxdb_url': args.influxdbUrl,
            'influxdb_database': args.influxdbDatabase,
            'influxdb_token': args.influxdbToken,
            'tls_ca': args.tlsCa,
            'prometheus_port': args.prometheusPort,
            'to_json': args.toJson,
            'from_json': args.fromJson,
        }
        for key, value in overrides.items():
            if value is not None:
                setattr(self, key, value)

        if args.isBarefoot:
            self.is_barefoot = True
        if args.noPagination:
            self.follow_pagination = False
        if args.emitDeltas:
            self.emit_deltas = True
        if not self.url.endswith('/'):
            self.url += '/'
