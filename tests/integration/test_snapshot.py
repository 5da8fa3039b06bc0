# [TESTER] v1

from __future__ import annotations

import pytest

from pairswap.core import Direction, LiquidityPool
from pairswap.integration import (
    InMemoryLedger,
    PoolSnapshot,
    snapshot_from_pool,
    snapshot_from_state,
    state_from_snapshot,
)
from pairswap.state import PoolState, ShareTable


def _pool() -> LiquidityPool:
    token_a, token_b = InMemoryLedger("TKA"), InMemoryLedger("TKB")
    for who in ("alice", "bob"):
        for token in (token_a, token_b):
            token.mint(who, 10_000)
            token.approve(who, "pool", 10_000)
    pool = LiquidityPool(token_a, token_b)
    pool.deposit("alice", 100, 200)
    pool.deposit("bob", 50, 100)
    return pool


def test_snapshot_roundtrip_is_deterministic() -> None:
    pool = _pool()
    snap = snapshot_from_pool(pool)
    state, shares = state_from_snapshot(snap.data)
    assert state == pool.state
    assert shares.get_all_balances() == pool.share_balances()
    again = snapshot_from_state(state, shares)
    assert again.canonical_bytes() == snap.canonical_bytes()
    assert again.commitment_hex() == snap.commitment_hex()
    assert snap.commitment_bytes().hex() == snap.commitment_hex()


def test_share_entries_sorted_by_holder() -> None:
    shares = ShareTable()
    shares.set("zed", 1)
    shares.set("amy", 2)
    state = PoolState("TKA", "TKB", reserve_a=3, reserve_b=3, total_shares=3)
    snap = snapshot_from_state(state, shares)
    assert [e["holder"] for e in snap.data["shares"]] == ["amy", "zed"]


def test_commitment_tracks_state_changes() -> None:
    pool = _pool()
    before = snapshot_from_pool(pool).commitment_hex()
    pool.swap("alice", Direction.A_TO_B, 10)
    assert snapshot_from_pool(pool).commitment_hex() != before


def test_commitment_is_domain_separated() -> None:
    snap = snapshot_from_pool(_pool())
    other = PoolSnapshot(version=2, data=snap.data)
    assert other.commitment_hex() != snap.commitment_hex()


def test_rejects_unsupported_version() -> None:
    data = dict(snapshot_from_pool(_pool()).data, version=99)
    with pytest.raises(ValueError, match="unsupported"):
        state_from_snapshot(data)


def test_rejects_inconsistent_status() -> None:
    data = dict(snapshot_from_pool(_pool()).data, status="EMPTY")
    with pytest.raises(ValueError, match="status"):
        state_from_snapshot(data)


def test_rejects_duplicate_holder() -> None:
    data = dict(snapshot_from_pool(_pool()).data)
    data["shares"] = [{"holder": "alice", "shares": 1}, {"holder": "alice", "shares": 2}]
    with pytest.raises(ValueError, match="duplicate"):
        state_from_snapshot(data)


def test_rejects_float_quantities() -> None:
    data = dict(snapshot_from_pool(_pool()).data, reserve_a=1.5)
    with pytest.raises(TypeError):
        state_from_snapshot(data)
