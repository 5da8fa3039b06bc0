"""
Integration layer: asset custody, in-memory ledgers, snapshots
"""

from .custody import AssetLedger, CustodyAdapter
from .ledger import InMemoryLedger
from .snapshot import PoolSnapshot, snapshot_from_pool, snapshot_from_state, state_from_snapshot

__all__ = [
    "AssetLedger",
    "CustodyAdapter",
    "InMemoryLedger",
    "PoolSnapshot",
    "snapshot_from_pool",
    "snapshot_from_state",
    "state_from_snapshot",
]
