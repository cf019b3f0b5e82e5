import logging
from datetime import datetime
from typing import Dict, Optional

# Port counters tracked per IfIndex for delta output
PORT_DELTA_COUNTERS = (
    'IfInUcastPkts',
    'IfOutUcastPkts',
    'IfInDiscards',
    'IfOutDiscards',
    'IfEtherPkts',
    'IfEtherMCPkts',
    'IfEtherBcastPkts',
)


class PortCounterCache:
    """
    Previous-cycle port counter snapshots keyed by IfIndex.

    Snapshots observed during a cycle are staged and only replace the stored
    ones when the cycle is committed, so a failed cycle never becomes the
    baseline for the next delta.
    """

    def __init__(self):
        self._snapshots: Dict[int, Dict[str, int]] = {}
        self._pending: Dict[int, Dict[str, int]] = {}
        self.committed_at: Optional[datetime] = None
        self.logger = logging.getLogger(__name__)

    def stage(self, if_index: int, counters: Dict[str, int]) -> Dict[str, int]:
        """
        Record this cycle's counters for an interface and return deltas
        against the last committed snapshot.

        Returns:
            Counter name -> delta. Empty when the interface has no snapshot
            yet. Counters that went backwards (device reset) are left out.
        """
        self._pending[if_index] = dict(counters)
        previous = self._snapshots.get(if_index)
        if previous is None:
            return {}

        deltas = {}
        for name, value in counters.items():
            if name not in previous:
                continue
            delta = value - previous[name]
            if delta < 0:
                self.logger.debug(f"Counter {name} on IfIndex {if_index} went backwards, skipping delta")
                continue
            deltas[name] = delta
        return deltas

    def commit(self, when: Optional[datetime] = None) -> None:
        self._snapshots = self._pending
        self._pending = {}
        self.committed_at = when

    def discard(self) -> None:
        self._pending = {}

    def __contains__(self, if_index: int) -> bool:
        return if_index in self._snapshots

    def __len__(self) -> int:
        return len(self._snapshots)
