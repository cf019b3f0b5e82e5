"""
FlexSwitch state schemas.
"""

from snapmon.schema.base_model import BaseModel, Envelope, Int64
from snapmon.schema.models import (
    AsicSummary, BufferPortStats, ConfigLogs, CoppState, IPv4IntfStates,
    Platform, PortState, PSUState, RouteStats, RouteStatsPerInt,
    RouteStatsPerProto, SFPState, SystemStatus, VlanState,
)

__all__ = [
    'BaseModel', 'Envelope', 'Int64',
    'AsicSummary', 'BufferPortStats', 'ConfigLogs', 'CoppState', 'IPv4IntfStates',
    'Platform', 'PortState', 'PSUState', 'RouteStats', 'RouteStatsPerInt',
    'RouteStatsPerProto', 'SFPState', 'SystemStatus', 'VlanState',
]
