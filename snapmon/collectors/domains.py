# -----------------------------------------------------------------------------
# Copyright (c) 2026 SnapRoute Telemetry Collector contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Emission tables for every collected FlexSwitch endpoint.

Each domain lists, per measurement, the emitted field name, its metric kind
and the payload attribute it is read from. Names, kinds and tag keys match
the series existing dashboards are built on and must not be "tidied":
``ports`` is shared by VLANs and ports, PSU ``SerialNum`` is a gauge, and
port ``OperSpeed`` carries the OperState string.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple, Type

from snapmon.metrics import MetricKind
from snapmon.schema import (
    AsicSummary, BaseModel, BufferPortStats, CoppState, Envelope, Platform,
    PortState, PSUState, RouteStats, SFPState, SystemStatus, VlanState,
)


class TagStyle(Enum):
    HOST = "host"       # {hostname}
    DEVICE = "device"   # {hostname, mgmt-ip, mgmt-ipv6}
    ENTRY = "entry"     # {<discriminator>, Hostname, mgmtip, mgmtipv6}


@dataclass(frozen=True)
class MetricField:
    name: str
    kind: MetricKind
    source: str

    def value(self, obj: Any) -> Any:
        return getattr(obj, self.source)


def _field(name: str, source: Optional[str] = None) -> MetricField:
    return MetricField(name, MetricKind.FIELD, source or name)


def _gauge(name: str, source: Optional[str] = None) -> MetricField:
    return MetricField(name, MetricKind.GAUGE, source or name)


def _counter(name: str, source: Optional[str] = None) -> MetricField:
    return MetricField(name, MetricKind.COUNTER, source or name)


def _entries(record: Envelope) -> List[Any]:
    return record.objects()


def _singleton(record: Any) -> List[Any]:
    return [record.Object]


def _daemons(record: SystemStatus) -> List[Any]:
    return list(record.Object.FlexDaemons)


@dataclass(frozen=True)
class MetricGroup:
    """One measurement fed from a set of payload objects of a decoded record."""
    measurement: str
    tag_style: TagStyle
    fields: Tuple[MetricField, ...]
    select: Callable[[Any], List[Any]] = _entries
    tag_key: Optional[str] = None
    tag_source: Optional[str] = None

    def tag_value(self, obj: Any) -> str:
        return str(getattr(obj, self.tag_source or self.tag_key))


@dataclass(frozen=True)
class Domain:
    name: str
    path: str
    model: Type[BaseModel]
    groups: Tuple[MetricGroup, ...]
    # core inventory/health domains report an unreachable device as status ready=false
    announce_failure: bool = True

    @property
    def paged(self) -> bool:
        return issubclass(self.model, Envelope) and 'Objects' in self.model.model_fields


PLATFORM = Domain(
    name='Platform',
    path='state/platform',
    model=Platform,
    groups=(
        MetricGroup('platform', TagStyle.DEVICE, (
            _field('ProductName'),
            _field('SerialNum'),
            _field('Manufacturer'),
            _field('Vendor'),
            _field('Release'),
            _field('PlatformName'),
            _field('Version'),
        ), select=_singleton),
    ),
)

PSU = Domain(
    name='PSU',
    path='state/psus',
    model=PSUState,
    groups=(
        MetricGroup('psu', TagStyle.ENTRY, (
            _field('AdminState'),
            _field('ModelNum'),
            _gauge('SerialNum'),
            _gauge('Volts in', 'Vin'),
            _gauge('Volts out', 'Vout'),
            _gauge('Amps In', 'Iin'),
            _gauge('Amps Out', 'Iout'),
            _gauge('Power In', 'Pin'),
            _gauge('Power Out', 'Pout'),
            _field('Fan Status', 'Fan'),
            _gauge('Fan ID', 'FanId'),
            _gauge('Led ID', 'LedId'),
        ), tag_key='PsuId'),
    ),
)

SFP = Domain(
    name='SFP',
    path='state/sfps',
    model=SFPState,
    groups=(
        MetricGroup('sfp', TagStyle.ENTRY, (
            _field('SfpSpeed'),
            _field('SfpLOS'),
            _field('SfpPresent'),
            _field('SfpType'),
            _field('SerialNum'),
            _field('EEPROM'),
        ), tag_key='SfpId'),
    ),
)

COPP = Domain(
    name='CoPP',
    path='state/coppstate',
    model=CoppState,
    groups=(
        MetricGroup('copp', TagStyle.ENTRY, (
            _gauge('PeakRate'),
            _gauge('BurstRate'),
            _counter('GreenPackets'),
            _counter('RedPackets'),
        ), tag_key='Protocol'),
    ),
)

VLAN = Domain(
    name='VLAN',
    path='state/vlans',
    model=VlanState,
    groups=(
        MetricGroup('ports', TagStyle.ENTRY, (
            _field('Name'),
            _field('OperState'),
            _gauge('IfIndex'),
            _field('SysInternal Description', 'SysInternalDescription'),
        ), tag_key='VlanId'),
    ),
)

PORT = Domain(
    name='Port',
    path='state/Ports',
    model=PortState,
    groups=(
        MetricGroup('ports', TagStyle.ENTRY, (
            _field('OperState'),
            _field('OperSpeed', 'OperState'),
            _counter('IfInUcastPkts'),
            _counter('IfOutUcastPkts'),
            _counter('IfinDiscards', 'IfInDiscards'),
            _counter('IfoutDiscards', 'IfOutDiscards'),
            _counter('IfInOctets'),
            _counter('IfOutOctets'),
            _counter('IfEtherPkts'),
            _counter('IfEtherMCPkts'),
            _counter('IfEtherBcastPkts'),
        ), tag_key='port', tag_source='IntfRef'),
    ),
)

ASIC_SUMMARY = Domain(
    name='AsicSummary',
    path='state/asicsummary',
    model=AsicSummary,
    groups=(
        MetricGroup('asicsum', TagStyle.HOST, (
            _counter('ModuleId'),
            _counter('NumPortsUp'),
            _counter('NumPortsDown'),
            _counter('NumVlans'),
            _counter('NumV4Intfs'),
            _counter('NumV6Intfs'),
            _counter('NumV4Adjs'),
            _counter('NumV6Adjs'),
            _counter('NumV4Routes'),
            _counter('NumV6Routes'),
            _counter('NumECMPRoutes'),
        ), select=_singleton),
    ),
    announce_failure=False,
)

SYSTEM_STATUS = Domain(
    name='SystemStatus',
    path='state/SystemStatus',
    model=SystemStatus,
    groups=(
        MetricGroup('status', TagStyle.HOST, (
            _field('Ready'),
            _field('ReadyReason', 'Reason'),
            _field('Uptime', 'UpTime'),
        ), select=_singleton),
        MetricGroup('DaemonStats', TagStyle.ENTRY, (
            _field('Enable'),
            _field('State'),
            _field('Reason'),
            _field('StartTime'),
            _field('KeepAlive'),
            _counter('RestartCount'),
            _field('RestartTime'),
            _field('RestartReason'),
        ), select=_daemons, tag_key='Daemon', tag_source='Name'),
    ),
)

ROUTE_STATS = Domain(
    name='RouteStats',
    path='state/routestat',
    model=RouteStats,
    groups=(
        MetricGroup('routestats', TagStyle.HOST, (
            _counter('TotalRouteCount'),
            _counter('ECMPRouteCount'),
            _counter('IPv4RouteCount', 'V4RouteCount'),
            _counter('IPv6RouteCount', 'V6RouteCount'),
        ), select=_singleton),
    ),
    announce_failure=False,
)

BUFFER_PORT_STATS = Domain(
    name='BufferPortStats',
    path='state/bufferportstats',
    model=BufferPortStats,
    groups=(
        MetricGroup('bufferportstats', TagStyle.ENTRY, (
            _counter('EgressPort'),
            _counter('IngressPort'),
            _counter('PortBufferStat'),
        ), tag_key='IntfRef'),
    ),
    announce_failure=False,
)

# Collection order
DOMAINS = (
    PLATFORM,
    PSU,
    SFP,
    COPP,
    VLAN,
    PORT,
    ASIC_SUMMARY,
    SYSTEM_STATUS,
    ROUTE_STATS,
    BUFFER_PORT_STATS,
)
