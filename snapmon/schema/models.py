# -----------------------------------------------------------------------------
# Copyright (c) 2026 SnapRoute Telemetry Collector contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Schemas for the FlexSwitch ``state/*`` endpoints.

Attribute names follow the API's own PascalCase keys so that a model can be
compared against a captured response field by field.
"""

from typing import Any, List

from pydantic import Field

from snapmon.schema.base_model import BaseModel, Envelope, Int64


# Platform (singleton)

class PlatformObject(BaseModel):
    ObjName: str = ''
    ProductName: str = ''
    SerialNum: str = ''
    Manufacturer: str = ''
    Vendor: str = ''
    Release: str = ''
    PlatformName: str = ''
    Version: str = ''


class Platform(BaseModel):
    ObjectId: str = ''
    Object: PlatformObject = Field(default_factory=PlatformObject)


# Power supplies

class PSU(BaseModel):
    PsuId: Int64 = 0
    AdminState: str = ''
    ModelNum: str = ''
    SerialNum: str = ''
    Vin: Int64 = 0
    Vout: Int64 = 0
    Iin: Int64 = 0
    Iout: Int64 = 0
    Pin: Int64 = 0
    Pout: Int64 = 0
    Fan: str = ''
    FanId: Int64 = 0
    LedId: Int64 = 0


class PSUEntry(BaseModel):
    ObjectId: str = ''
    Object: PSU = Field(default_factory=PSU)


class PSUState(Envelope):
    Objects: List[PSUEntry] = Field(default_factory=list)


# Optics

class SFP(BaseModel):
    SfpId: Int64 = 0
    SfpSpeed: str = ''
    SfpLOS: str = ''
    SfpPresent: str = ''
    SfpType: str = ''
    SerialNum: str = ''
    EEPROM: str = ''


class SFPEntry(BaseModel):
    ObjectId: str = ''
    Object: SFP = Field(default_factory=SFP)


class SFPState(Envelope):
    Objects: List[SFPEntry] = Field(default_factory=list)


# Control plane policing

class Copp(BaseModel):
    Protocol: str = ''
    PeakRate: Int64 = 0
    BurstRate: Int64 = 0
    GreenPackets: Int64 = 0
    RedPackets: Int64 = 0


class CoppEntry(BaseModel):
    ObjectId: str = ''
    Object: Copp = Field(default_factory=Copp)


class CoppState(Envelope):
    Objects: List[CoppEntry] = Field(default_factory=list)


# IPv4 interfaces

class IPv4Intf(BaseModel):
    IntfRef: str = ''
    IfIndex: Int64 = 0
    IpAddr: str = ''
    OperState: str = ''
    NumUpEvents: Int64 = 0
    LastUpEventTime: str = ''
    NumDownEvents: Int64 = 0
    LastDownEventTime: str = ''
    L2IntfType: str = ''
    L2IntfId: Int64 = 0


class IPv4IntfEntry(BaseModel):
    ObjectId: str = ''
    Object: IPv4Intf = Field(default_factory=IPv4Intf)


class IPv4IntfStates(Envelope):
    Objects: List[IPv4IntfEntry] = Field(default_factory=list)


# VLANs

class Vlan(BaseModel):
    VlanId: Int64 = 0
    Name: str = ''
    OperState: str = ''
    IfIndex: Int64 = 0
    SysInternalDescription: str = ''


class VlanEntry(BaseModel):
    ObjectId: str = ''
    Object: Vlan = Field(default_factory=Vlan)


class VlanState(Envelope):
    Objects: List[VlanEntry] = Field(default_factory=list)


# Routing

class ProtocolRouteCount(BaseModel):
    Protocol: str = ''
    RouteCount: Int64 = 0
    EcmpCount: Int64 = 0


class RouteStatsObject(BaseModel):
    Vrf: str = ''
    TotalRouteCount: Int64 = 0
    ECMPRouteCount: Int64 = 0
    V4RouteCount: Int64 = 0
    V6RouteCount: Int64 = 0
    PerProtocolRouteCountList: List[ProtocolRouteCount] = Field(default_factory=list)


class RouteStats(BaseModel):
    ObjectId: str = ''
    Object: RouteStatsObject = Field(default_factory=RouteStatsObject)


class RouteStatsInt(BaseModel):
    Intfref: str = ''
    V4Routes: List[str] = Field(default_factory=list)
    # Upstream has not fixed this schema; any JSON is accepted as-is
    V6Routes: Any = None


class RouteStatsIntEntry(BaseModel):
    ObjectId: str = ''
    Object: RouteStatsInt = Field(default_factory=RouteStatsInt)


class RouteStatsPerInt(Envelope):
    Objects: List[RouteStatsIntEntry] = Field(default_factory=list)


class NextHop(BaseModel):
    NextHopIp: str = ''
    NextHopIntRef: str = ''
    Weight: Int64 = 0


class V4Route(BaseModel):
    DestinationNw: str = ''
    IsInstalledInHw: bool = False
    NextHopList: List[NextHop] = Field(default_factory=list)


class RouteStatsProto(BaseModel):
    Protocol: str = ''
    V4Routes: List[V4Route] = Field(default_factory=list)
    V6Routes: Any = None


class RouteStatsProtoEntry(BaseModel):
    ObjectId: str = ''
    Object: RouteStatsProto = Field(default_factory=RouteStatsProto)


class RouteStatsPerProto(Envelope):
    Objects: List[RouteStatsProtoEntry] = Field(default_factory=list)


# ASIC (singleton)

class AsicSummaryObject(BaseModel):
    ModuleId: Int64 = 0
    NumPortsUp: Int64 = 0
    NumPortsDown: Int64 = 0
    NumVlans: Int64 = 0
    NumV4Intfs: Int64 = 0
    NumV6Intfs: Int64 = 0
    NumV4Adjs: Int64 = 0
    NumV6Adjs: Int64 = 0
    NumV4Routes: Int64 = 0
    NumV6Routes: Int64 = 0
    NumECMPRoutes: Int64 = 0


class AsicSummary(BaseModel):
    ObjectId: str = ''
    Object: AsicSummaryObject = Field(default_factory=AsicSummaryObject)


# System and daemon health (singleton carrying envelope counters)

class FlexDaemon(BaseModel):
    Name: str = ''
    Enable: bool = False
    State: str = ''
    Reason: str = ''
    StartTime: str = ''
    KeepAlive: str = ''
    RestartCount: Int64 = 0
    RestartTime: str = ''
    RestartReason: str = ''


class SystemStatusObject(BaseModel):
    Name: str = ''
    Ready: bool = False
    Reason: str = ''
    UpTime: str = ''
    NumCreateCalls: str = ''
    NumDeleteCalls: str = ''
    NumUpdateCalls: str = ''
    NumGetCalls: str = ''
    NumActionCalls: str = ''
    FlexDaemons: List[FlexDaemon] = Field(default_factory=list)


class SystemStatus(Envelope):
    ObjectId: str = ''
    Object: SystemStatusObject = Field(default_factory=SystemStatusObject)


# Ports

class Port(BaseModel):
    IntfRef: str = ''
    IfIndex: Int64 = 0
    Name: str = ''
    OperState: str = ''
    NumUpEvents: Int64 = 0
    LastUpEventTime: str = ''
    NumDownEvents: Int64 = 0
    LastDownEventTime: str = ''
    Pvid: Int64 = 0
    IfInOctets: Int64 = 0
    IfInUcastPkts: Int64 = 0
    IfInDiscards: Int64 = 0
    IfInErrors: Int64 = 0
    IfInUnknownProtos: Int64 = 0
    IfOutOctets: Int64 = 0
    IfOutUcastPkts: Int64 = 0
    IfOutDiscards: Int64 = 0
    IfOutErrors: Int64 = 0
    IfEtherUnderSizePktCnt: Int64 = 0
    IfEtherOverSizePktCnt: Int64 = 0
    IfEtherFragments: Int64 = 0
    IfEtherCRCAlignError: Int64 = 0
    IfEtherJabber: Int64 = 0
    IfEtherPkts: Int64 = 0
    IfEtherMCPkts: Int64 = 0
    IfEtherBcastPkts: Int64 = 0
    IfEtherPkts64OrLessOctets: Int64 = 0
    IfEtherPkts65To127Octets: Int64 = 0
    IfEtherPkts128To255Octets: Int64 = 0
    IfEtherPkts256To511Octets: Int64 = 0
    IfEtherPkts512To1023Octets: Int64 = 0
    IfEtherPkts1024To1518Octets: Int64 = 0
    ErrDisableReason: str = ''
    PresentInHW: str = ''
    ConfigMode: str = ''
    PRBSRxErrCnt: Int64 = 0
    PcpToCosProfileRef: str = ''
    DscpToCosProfileRef: str = ''
    SchedProfileRef: str = ''
    OperSpeed: Int64 = 0
    OperDuplex: str = ''


class PortEntry(BaseModel):
    ObjectId: str = ''
    Object: Port = Field(default_factory=Port)


class PortState(Envelope):
    Objects: List[PortEntry] = Field(default_factory=list)


# Buffer statistics (BST)

class BufferPortStat(BaseModel):
    IntfRef: str = ''
    IfIndex: Int64 = 0
    EgressPort: Int64 = 0
    IngressPort: Int64 = 0
    PortBufferStat: Int64 = 0


class BufferPortStatEntry(BaseModel):
    ObjectId: str = ''
    Object: BufferPortStat = Field(default_factory=BufferPortStat)


class BufferPortStats(Envelope):
    Objects: List[BufferPortStatEntry] = Field(default_factory=list)


# Configuration audit log

class ConfigLog(BaseModel):
    SeqNum: Int64 = 0
    Time: str = ''
    API: str = ''
    Operation: str = ''
    Data: str = ''
    Result: str = ''
    UserAddr: str = ''
    UserName: str = ''


class ConfigLogEntry(BaseModel):
    ObjectId: str = ''
    Object: ConfigLog = Field(default_factory=ConfigLog)


class ConfigLogs(Envelope):
    Objects: List[ConfigLogEntry] = Field(default_factory=list)
