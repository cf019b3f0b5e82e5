"""Shared pytest fixtures for snapmon tests."""
import json

import pytest

from snapmon.collectors.collector import SnapRouteCollector
from snapmon.errors import TransportError
from snapmon.identity import Identity
from snapmon.metrics import Accumulator

BASE_URL = "http://switch:8080/public/v1/"


class FakeTransport:
    """Serves canned bodies keyed by full URL; values may be exceptions."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.requests = []

    def fetch(self, url):
        self.requests.append(url)
        if url not in self.responses:
            raise TransportError(url, "connection refused")
        body = self.responses[url]
        if isinstance(body, Exception):
            raise body
        if isinstance(body, (dict, list)):
            return json.dumps(body).encode()
        return body

    def close(self):
        pass


def envelope(*objects, more=False, current=0, next_marker=0):
    return {
        "MoreExist": more,
        "ObjCount": len(objects),
        "CurrentMarker": current,
        "NextMarker": next_marker,
        "Objects": [{"ObjectId": str(i), "Object": obj} for i, obj in enumerate(objects)],
    }


def healthy_responses():
    """A complete, minimal set of responses for every collected endpoint."""
    return {
        BASE_URL + "state/platform": {
            "ObjectId": "1",
            "Object": {"ProductName": "S6000", "SerialNum": "CN123", "Manufacturer": "Dell",
                       "Vendor": "Dell", "Release": "1.0", "PlatformName": "x86", "Version": "A00"},
        },
        BASE_URL + "state/psus": envelope(
            {"PsuId": 1, "AdminState": "UP", "ModelNum": "M1", "SerialNum": "S1",
             "Vin": 120, "Vout": 12, "Iin": 2, "Iout": 10, "Pin": 240, "Pout": 120,
             "Fan": "OK", "FanId": 1, "LedId": 3},
        ),
        BASE_URL + "state/sfps": envelope(),
        BASE_URL + "state/coppstate": envelope(
            {"Protocol": "BGP", "PeakRate": 100, "BurstRate": 200, "GreenPackets": 5, "RedPackets": 0},
        ),
        BASE_URL + "state/vlans": envelope(
            {"VlanId": 10, "Name": "users", "OperState": "UP", "IfIndex": 100,
             "SysInternalDescription": "vlan10"},
        ),
        BASE_URL + "state/Ports": envelope(
            {"IntfRef": "fpPort1", "IfIndex": 1, "OperState": "UP", "IfInUcastPkts": 10,
             "IfOutUcastPkts": 20, "IfInDiscards": 0, "IfOutDiscards": 1, "IfInOctets": 1000,
             "IfOutOctets": 2000, "IfEtherPkts": 30, "IfEtherMCPkts": 2, "IfEtherBcastPkts": 1},
        ),
        BASE_URL + "state/asicsummary": {"ObjectId": "1", "Object": {"ModuleId": 0, "NumPortsUp": 4}},
        BASE_URL + "state/SystemStatus": {
            "ObjectId": "1",
            "Object": {"Name": "sw1", "Ready": True, "Reason": "", "UpTime": "1h",
                       "FlexDaemons": [{"Name": "bgpd", "Enable": True, "State": "up",
                                        "RestartCount": 0}]},
        },
        BASE_URL + "state/routestat": {"ObjectId": "1", "Object": {
            "TotalRouteCount": 12, "ECMPRouteCount": 1, "V4RouteCount": 10, "V6RouteCount": 2}},
        BASE_URL + "state/bufferportstats": envelope(
            {"IntfRef": "fpPort1", "EgressPort": 1, "IngressPort": 2, "PortBufferStat": 3},
        ),
    }


@pytest.fixture
def identity():
    return Identity(hostname="sw1", mgmt_ipv4="10.0.0.5/24", mgmt_ipv6="2001:db8::5/64")


@pytest.fixture
def acc():
    return Accumulator()


@pytest.fixture
def make_collector(identity):
    """Build a collector over a FakeTransport with a fixed identity."""
    def _make(responses=None, **kwargs):
        transport = FakeTransport(healthy_responses() if responses is None else responses)
        collector = SnapRouteCollector(url=BASE_URL, transport=transport,
                                       identity_resolver=lambda: identity, **kwargs)
        return collector, transport
    return _make
