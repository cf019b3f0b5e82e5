# -----------------------------------------------------------------------------
# Copyright (c) 2026 SnapRoute Telemetry Collector contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Collection cycle for a SnapRoute device.

One call to SnapRouteCollector.gather() walks every domain in DOMAINS order:
fetch, decode, tag, emit. The first failing domain ends the cycle. Core
inventory and health domains first report the device as not ready; the
statistics domains fail without a status sample.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from snapmon.cache.counter_cache import PORT_DELTA_COUNTERS, PortCounterCache
from snapmon.collectors.domains import DOMAINS, PORT, Domain, MetricGroup, TagStyle
from snapmon.connection import HttpTransport
from snapmon.errors import DecodeError, TransportError
from snapmon.identity import Identity, get_hostname, resolve_identity
from snapmon.metrics import MetricKind
from snapmon.schema import Envelope

LOG = logging.getLogger(__name__)

DEFAULT_URL = "http://localhost:8080/public/v1/"
DEFAULT_MAX_PAGES = 100

_EMITTERS = {
    MetricKind.FIELD: 'emit_field',
    MetricKind.GAUGE: 'emit_gauge',
    MetricKind.COUNTER: 'emit_counter',
}


def emit(acc, kind: MetricKind, measurement: str, fields: Dict[str, Any],
         tags: Dict[str, str], timestamp: Optional[datetime] = None) -> None:
    """Route a sample to the sink method matching its kind."""
    getattr(acc, _EMITTERS[kind])(measurement, fields, tags, timestamp)


def emit_not_ready(acc, hostname: str) -> None:
    acc.emit_field('status', {'ready': False}, {'hostname': hostname}, datetime.now(timezone.utc))


@contextmanager
def cycle_guard(acc):
    """
    Last-resort handler around a whole cycle.

    Domain failures pass through to the caller. Anything else, including
    identity resolution failures, is logged and reported as a single
    ``status ready=false`` sample instead of escaping the cycle.
    """
    try:
        yield
    except (TransportError, DecodeError):
        raise
    except Exception as e:
        LOG.error(f"Problem reading from SnapRoute: {e}", exc_info=True)
        emit_not_ready(acc, get_hostname())


class SnapRouteCollector:
    """Gather SnapRoute metrics"""

    def __init__(self, url: str = DEFAULT_URL, is_barefoot: bool = False, transport=None,
                 follow_pagination: bool = True, max_pages: int = DEFAULT_MAX_PAGES,
                 emit_deltas: bool = False,
                 identity_resolver: Callable[[], Identity] = resolve_identity):
        """
        Args:
            url: API prefix, e.g. http://localhost:8080/public/v1/
            is_barefoot: Device family flag (accepted, does not change collection)
            transport: Object with fetch(url) -> bytes; HttpTransport by default
            follow_pagination: Follow NextMarker while MoreExist is set
            max_pages: Upper bound on pages read per endpoint
            emit_deltas: Also emit per-port counter deltas against the previous cycle
            identity_resolver: Returns the Identity used for tagging
        """
        self.url = url
        self.is_barefoot = is_barefoot
        self.transport = transport or HttpTransport()
        self.follow_pagination = follow_pagination
        self.max_pages = max_pages
        self.identity_resolver = identity_resolver
        self.counter_cache = PortCounterCache() if emit_deltas else None
        self.last_time: Optional[datetime] = None

        if is_barefoot:
            LOG.debug("isBarefoot is set; collection is identical for all device families")

    def gather(self, acc) -> None:
        """
        Run one collection cycle into the accumulator.

        Raises:
            TransportError: an endpoint could not be fetched
            DecodeError: an endpoint returned a body that does not match its schema
        """
        now = datetime.now(timezone.utc)
        with cycle_guard(acc):
            identity = self.identity_resolver()
            try:
                for domain in DOMAINS:
                    self._collect_domain(domain, acc, identity, now)
                    if domain is PORT:
                        self.last_time = now
            except (TransportError, DecodeError):
                if self.counter_cache is not None:
                    self.counter_cache.discard()
                raise

            if self.counter_cache is not None:
                self.counter_cache.commit(now)

    def _collect_domain(self, domain: Domain, acc, identity: Identity, now: datetime) -> None:
        request_url = f"{self.url}{domain.path}"
        try:
            record = self._fetch_record(domain, request_url)
        except TransportError as e:
            LOG.error(f"Error talking to SnapRoute: {e}")
            if domain.announce_failure:
                emit_not_ready(acc, identity.hostname)
            raise
        except DecodeError as e:
            LOG.error(f"Error unmarshalling {domain.name}: {e.reason}")
            LOG.error(f"content: {e.content!r}")
            if domain.announce_failure:
                emit_not_ready(acc, identity.hostname)
            raise

        objects = 0
        for group in domain.groups:
            objects += self._emit_group(group, record, acc, identity, now)

        if domain is PORT and self.counter_cache is not None:
            self._emit_port_deltas(record, acc, identity, now)

        LOG.debug(f"{domain.name}: emitted {objects} objects from {request_url}")

    def _fetch_record(self, domain: Domain, request_url: str):
        """
        Fetch and decode an endpoint, following NextMarker across pages.
        """
        content = self.transport.fetch(request_url)
        record = domain.model.from_api_response(content, url=request_url)
        if not (self.follow_pagination and domain.paged):
            return record

        seen_markers = {record.CurrentMarker}
        pages = 1
        while record.MoreExist:
            marker = record.NextMarker
            if marker in seen_markers:
                LOG.warning(f"{domain.name}: NextMarker {marker} does not advance, stopping after {pages} pages")
                break
            if pages >= self.max_pages:
                LOG.warning(f"{domain.name}: stopping at {pages} pages, more objects exist")
                break

            page_url = f"{request_url}?CurrentMarker={marker}"
            content = self.transport.fetch(page_url)
            page = domain.model.from_api_response(content, url=page_url)
            record = record.merged_with(page)
            seen_markers.add(marker)
            pages += 1

        return record

    def _emit_group(self, group: MetricGroup, record, acc, identity: Identity, now: datetime) -> int:
        objects = group.select(record)
        for obj in objects:
            tags = self._tags(group, obj, identity)
            for metric in group.fields:
                emit(acc, metric.kind, group.measurement, {metric.name: metric.value(obj)}, tags, now)
        return len(objects)

    @staticmethod
    def _tags(group: MetricGroup, obj: Any, identity: Identity) -> Dict[str, str]:
        if group.tag_style is TagStyle.HOST:
            return identity.host_tags()
        if group.tag_style is TagStyle.DEVICE:
            return identity.device_tags()
        return identity.entry_tags(group.tag_key, group.tag_value(obj))

    def _emit_port_deltas(self, record: Envelope, acc, identity: Identity, now: datetime) -> None:
        for port in record.objects():
            counters = {name: getattr(port, name) for name in PORT_DELTA_COUNTERS}
            deltas = self.counter_cache.stage(port.IfIndex, counters)
            if not deltas:
                continue
            tags = identity.entry_tags('port', port.IntfRef)
            for name, delta in deltas.items():
                acc.emit_gauge('ports', {f"{name}Delta": delta}, tags, now)
