"""
Pool snapshot encoding.

Goals:
- Deterministic JSON serialization for hashing / audit comparison.
- Decodable back into the `PoolState` + `ShareTable` pair it was taken from.
- Explicit versioning.

Snapshots are read-only views: decoding one never installs state into a pool.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Mapping, Tuple

from ..state.canonical import canonical_json_bytes, domain_sep_bytes, sha256_hex
from ..state.pool import PoolState
from ..state.shares import ShareTable

if TYPE_CHECKING:
    from ..core.engine import LiquidityPool


POOL_SNAPSHOT_VERSION = 1


def _require_str(value: Any, *, name: str, max_len: int = 4096) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    if not value:
        raise ValueError(f"{name} must be non-empty")
    if len(value) > max_len:
        raise ValueError(f"{name} too large")
    return value


def _require_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return int(value)


@dataclass(frozen=True)
class PoolSnapshot:
    """
    Deterministic, versioned snapshot of a pool.

    The commitment is *not* included inside `data` to avoid self-reference.
    """

    version: int
    data: Dict[str, Any]

    def canonical_bytes(self) -> bytes:
        return canonical_json_bytes(self.data)

    def commitment_bytes(self) -> bytes:
        payload = domain_sep_bytes("pool_snapshot", version=self.version) + self.canonical_bytes()
        return hashlib.sha256(payload).digest()

    def commitment_hex(self) -> str:
        payload = domain_sep_bytes("pool_snapshot", version=self.version) + self.canonical_bytes()
        return sha256_hex(payload)


def snapshot_from_state(
    state: PoolState, shares: ShareTable, *, version: int = POOL_SNAPSHOT_VERSION
) -> PoolSnapshot:
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")

    share_entries = [
        {"holder": holder, "shares": int(amount)}
        for holder, amount in shares.get_all_balances().items()
    ]
    share_entries.sort(key=lambda e: e["holder"])

    data: Dict[str, Any] = {
        "version": int(version),
        "asset_a": state.asset_a,
        "asset_b": state.asset_b,
        "reserve_a": int(state.reserve_a),
        "reserve_b": int(state.reserve_b),
        "total_shares": int(state.total_shares),
        "status": state.status.value,
        "shares": share_entries,
    }
    return PoolSnapshot(version=version, data=data)


def snapshot_from_pool(pool: "LiquidityPool", *, version: int = POOL_SNAPSHOT_VERSION) -> PoolSnapshot:
    """Snapshot a live pool's state and share table as of one consistent read."""
    state, shares = pool.state_and_shares()
    return snapshot_from_state(state, shares, version=version)


def state_from_snapshot(data: Mapping[str, Any]) -> Tuple[PoolState, ShareTable]:
    if not isinstance(data, Mapping):
        raise TypeError("snapshot data must be a mapping")
    version = _require_int(data.get("version"), name="version")
    if version != POOL_SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version: {version}")

    state = PoolState(
        asset_a=_require_str(data.get("asset_a"), name="asset_a"),
        asset_b=_require_str(data.get("asset_b"), name="asset_b"),
        reserve_a=_require_int(data.get("reserve_a"), name="reserve_a"),
        reserve_b=_require_int(data.get("reserve_b"), name="reserve_b"),
        total_shares=_require_int(data.get("total_shares"), name="total_shares"),
    )
    status = data.get("status")
    if status != state.status.value:
        raise ValueError(f"status {status!r} does not match reserves ({state.status.value})")

    entries = data.get("shares")
    if not isinstance(entries, list):
        raise TypeError("shares must be a list")
    shares = ShareTable()
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise TypeError("share entry must be a mapping")
        holder = _require_str(entry.get("holder"), name="holder")
        if shares.get(holder) != 0:
            raise ValueError(f"duplicate share holder: {holder}")
        shares.set(holder, _require_int(entry.get("shares"), name="shares"))
    return state, shares
